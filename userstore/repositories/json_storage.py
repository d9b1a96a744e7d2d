"""
JSON-file persistence adapter for user records.

The whole collection lives in a single file as one JSON array. Every call
reads the full file and mutations rewrite it from offset zero; there is no
locking, so concurrent writers race (last writer wins).
"""

from __future__ import annotations

from contextlib import contextmanager
import logging
import os
from pathlib import Path
from typing import BinaryIO, Iterable, Iterator, Union

from pydantic import TypeAdapter, ValidationError

from userstore.core.config import get_settings
from userstore.core.errors import RecordFormatError, StorageIOError
from userstore.domain.users import User

PathLike = Union[str, os.PathLike]

logger = logging.getLogger(__name__)

_USERS = TypeAdapter(list[User])


def _describe(exc: ValidationError) -> str:
    err = exc.errors()[0]
    loc = ".".join(str(part) for part in err.get("loc") or ())
    return f"{loc}: {err['msg']}" if loc else err["msg"]


def _io_error(action: str, path: PathLike, exc: OSError) -> StorageIOError:
    reason = exc.strerror or str(exc)
    return StorageIOError(f"{action} {os.fspath(path)}: {reason}")


# -------------------------- codec --------------------------
def decode(data: bytes) -> list[User]:
    """Parse a JSON array of users. Zero bytes means an empty collection."""
    if not data:
        return []
    try:
        return _USERS.validate_json(data)
    except ValidationError as exc:
        raise RecordFormatError(f"invalid user collection: {_describe(exc)}") from exc


def encode(users: Iterable[User]) -> bytes:
    return _USERS.dump_json(list(users))


def decode_single(data: bytes | str) -> User:
    """Parse one JSON object into a User."""
    try:
        return User.model_validate_json(data)
    except ValidationError as exc:
        raise RecordFormatError(f"invalid user item: {_describe(exc)}") from exc


def encode_single(user: User) -> bytes:
    return user.model_dump_json().encode("utf-8")


# -------------------------- file access --------------------------
def read_raw(path: PathLike) -> bytes:
    """Return the file content verbatim. The file is never created here."""
    try:
        data = Path(path).read_bytes()
    except OSError as exc:
        raise _io_error("read", path, exc) from exc
    logger.debug("read %d bytes from %s", len(data), path)
    return data


class RecordFile:
    """Open backing file plus the collection decoded from it."""

    def __init__(self, handle: BinaryIO, path: PathLike, users: list[User]):
        self._handle = handle
        self.path = path
        self.users = users

    def rewrite(self, users: Iterable[User]) -> None:
        """Replace the whole file content with ``users``."""
        users = list(users)
        data = encode(users)
        try:
            self._handle.truncate(0)
            self._handle.seek(0)
            self._handle.write(data)
            self._handle.flush()
        except OSError as exc:
            raise _io_error("write", self.path, exc) from exc
        self.users = users
        logger.debug("rewrote %s with %d records", self.path, len(users))


@contextmanager
def open_collection(path: PathLike, mode: int | None = None) -> Iterator[RecordFile]:
    """
    Open ``path`` for read/write, creating it if absent, and decode it.

    The handle is closed on every exit path, including decode failures.
    """
    if mode is None:
        mode = get_settings().file_mode
    try:
        fd = os.open(path, os.O_RDWR | os.O_CREAT, mode)
    except OSError as exc:
        raise _io_error("open", path, exc) from exc
    with os.fdopen(fd, "r+b") as handle:
        try:
            raw = handle.read()
        except OSError as exc:
            raise _io_error("read", path, exc) from exc
        users = decode(raw)
        logger.debug("opened %s (%d records)", path, len(users))
        yield RecordFile(handle, path, users)
