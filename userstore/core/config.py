"""
Configuration helpers for userstore.

Settings are read from environment variables once and cached, so that
services and the CLI never fetch os.environ directly.
"""

from dataclasses import dataclass
from functools import lru_cache
import os

DEFAULT_USERS_FILE = "users.json"
DEFAULT_FILE_MODE = 0o644
DEFAULT_LOG_LEVEL = "WARNING"

LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    users_file: str
    file_mode: int
    log_level: str


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _mode(value: str | None, default: int) -> int:
        try:
            mode = int(value, 8)
        except (TypeError, ValueError):
            return default
        if mode < 0 or mode > 0o777:
            return default
        return mode

    def _level(value: str | None, default: str) -> str:
        level = (value or "").strip().upper()
        return level if level in LOG_LEVELS else default

    return Settings(
        users_file=(os.getenv("USERSTORE_FILE") or "").strip() or DEFAULT_USERS_FILE,
        file_mode=_mode(os.getenv("USERSTORE_FILE_MODE"), DEFAULT_FILE_MODE),
        log_level=_level(os.getenv("USERSTORE_LOG_LEVEL"), DEFAULT_LOG_LEVEL),
    )
