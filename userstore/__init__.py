"""userstore: a tiny JSON-file backed store of user records."""

__version__ = "0.1.0"
