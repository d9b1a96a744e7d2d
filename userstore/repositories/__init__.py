"""
Persistence adapters.

Today a single JSON array on disk. Services should go through these helpers
instead of opening the backing file themselves.
"""
