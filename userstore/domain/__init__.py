"""Domain models and pure helpers (no file access here)."""
