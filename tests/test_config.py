from __future__ import annotations

import logging
import sys
from pathlib import Path

import pytest

# Garante que o pacote userstore seja importável durante os testes locais
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from userstore.core import config as core_config  # noqa: E402
from userstore.core.log import configure_logging  # noqa: E402


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    for name in ("USERSTORE_FILE", "USERSTORE_FILE_MODE", "USERSTORE_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    core_config.get_settings.cache_clear()
    yield
    core_config.get_settings.cache_clear()


def test_defaults():
    settings = core_config.get_settings()
    assert settings.users_file == "users.json"
    assert settings.file_mode == 0o644
    assert settings.log_level == "WARNING"


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("USERSTORE_FILE", "/tmp/people.json")
    monkeypatch.setenv("USERSTORE_FILE_MODE", "600")
    monkeypatch.setenv("USERSTORE_LOG_LEVEL", "debug")
    settings = core_config.get_settings()
    assert settings.users_file == "/tmp/people.json"
    assert settings.file_mode == 0o600
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize("mode", ["rw", "999", "-1", "10000"])
def test_invalid_mode_falls_back(monkeypatch, mode):
    monkeypatch.setenv("USERSTORE_FILE_MODE", mode)
    assert core_config.get_settings().file_mode == 0o644


def test_invalid_level_falls_back(monkeypatch):
    monkeypatch.setenv("USERSTORE_LOG_LEVEL", "chatty")
    assert core_config.get_settings().log_level == "WARNING"


def test_settings_are_cached(monkeypatch):
    first = core_config.get_settings()
    monkeypatch.setenv("USERSTORE_FILE", "other.json")
    assert core_config.get_settings() is first


def test_configure_logging_does_not_duplicate_handlers():
    logger = logging.getLogger("userstore")
    configure_logging("INFO")
    configure_logging("DEBUG")
    ours = [h for h in logger.handlers if getattr(h, "_userstore_cli", False)]
    assert len(ours) == 1
    assert logger.level == logging.DEBUG
