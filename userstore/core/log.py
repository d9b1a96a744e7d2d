"""Logging setup for the command-line entry point."""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "[%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: str = "WARNING") -> None:
    """
    Attach a stderr handler to the package logger.

    Only the ``userstore`` logger is touched so that libraries and test
    runners keep their own handlers. Calling it twice does not duplicate
    output.
    """
    logger = logging.getLogger("userstore")
    logger.setLevel(level)
    for handler in logger.handlers:
        if getattr(handler, "_userstore_cli", False):
            handler.setStream(sys.stderr)
            handler.setLevel(level)
            return
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.setLevel(level)
    handler._userstore_cli = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
