"""
Core utilities shared across the userstore package.

This package hosts:
- configuration helpers (env vars, default paths, file permissions)
- the error hierarchy raised by repositories and services
- logging setup used by the command-line entry point

Repositories and services depend on these primitives instead of reading
os.environ or configuring handlers themselves.
"""
