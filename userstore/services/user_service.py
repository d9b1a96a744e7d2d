"""
User record use cases: list, add, remove and find by id.

Every call reconstructs the collection from the backing file, applies one
operation and, for mutations, rewrites the file wholesale. Duplicate ids on
add and unknown ids on remove/find are not errors: they come back as a
tagged OperationResult so callers can branch without matching strings.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import logging
from typing import BinaryIO, Callable, Dict, Optional

from userstore.core.config import DEFAULT_USERS_FILE, Settings, get_settings
from userstore.core.errors import (
    MissingParameterError,
    StorageIOError,
    UnknownOperationError,
)
from userstore.domain.users import find_index, find_user, id_exists, without_index
from userstore.repositories import json_storage

logger = logging.getLogger(__name__)

OP_LIST = "list"
OP_ADD = "add"
OP_REMOVE = "remove"
OP_FIND_BY_ID = "findById"

OPERATIONS = (OP_LIST, OP_ADD, OP_REMOVE, OP_FIND_BY_ID)


class ResultStatus(str, Enum):
    OK = "ok"
    CONFLICT = "conflict"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class OperationResult:
    """Outcome of one operation: a payload, a conflict or a miss."""

    status: ResultStatus
    payload: bytes = b""
    message: str = ""

    @classmethod
    def success(cls, payload: bytes = b"") -> "OperationResult":
        return cls(ResultStatus.OK, payload=payload)

    @classmethod
    def conflict(cls, message: str) -> "OperationResult":
        return cls(ResultStatus.CONFLICT, message=message)

    @classmethod
    def not_found(cls, message: str = "") -> "OperationResult":
        return cls(ResultStatus.NOT_FOUND, message=message)

    @property
    def ok(self) -> bool:
        return self.status is ResultStatus.OK

    def to_bytes(self) -> bytes:
        """Bytes written to the output sink for this result."""
        if self.ok:
            return self.payload
        return self.message.encode("utf-8")


@dataclass(frozen=True)
class OperationParams:
    """One field per recognised parameter; validated once before dispatch."""

    operation: str = ""
    file_name: str = DEFAULT_USERS_FILE
    item: str = ""
    user_id: str = ""

    def validate(self) -> None:
        if not self.operation:
            raise MissingParameterError("operation")
        if self.operation not in OPERATIONS:
            raise UnknownOperationError(self.operation)
        if self.operation == OP_LIST and not self.file_name:
            raise MissingParameterError("fileName")
        if self.operation == OP_ADD and not self.item:
            raise MissingParameterError("item")
        if self.operation in (OP_REMOVE, OP_FIND_BY_ID) and not self.user_id:
            raise MissingParameterError("id")


class UserService:
    """Runs user record operations against a JSON file."""

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self.settings = settings or get_settings()

    # -------------------------------------- operations --------------------------------------
    def list_users(self, file_name: str) -> OperationResult:
        """Raw file bytes, unparsed. Missing files are an error, not created."""
        if not file_name:
            raise MissingParameterError("fileName")
        return OperationResult.success(json_storage.read_raw(file_name))

    def add_user(self, item: str, file_name: str) -> OperationResult:
        if not item:
            raise MissingParameterError("item")
        candidate = json_storage.decode_single(item)
        with json_storage.open_collection(file_name, self.settings.file_mode) as records:
            if id_exists(records.users, candidate.id):
                logger.warning("user %s already exists in %s", candidate.id, file_name)
                return OperationResult.conflict(f"Item with id {candidate.id} already exists")
            records.rewrite([*records.users, candidate])
        logger.info("added user %s to %s", candidate.id, file_name)
        return OperationResult.success()

    def remove_user(self, user_id: str, file_name: str) -> OperationResult:
        if not user_id:
            raise MissingParameterError("id")
        with json_storage.open_collection(file_name, self.settings.file_mode) as records:
            index = find_index(records.users, user_id)
            if index is None:
                logger.warning("user %s not found in %s", user_id, file_name)
                return OperationResult.not_found(f"Item with id {user_id} not found")
            records.rewrite(without_index(records.users, index))
        logger.info("removed user %s from %s", user_id, file_name)
        return OperationResult.success()

    def find_by_id(self, file_name: str, user_id: str) -> OperationResult:
        if not user_id:
            raise MissingParameterError("id")
        with json_storage.open_collection(file_name, self.settings.file_mode) as records:
            user = find_user(records.users, user_id)
        if user is None:
            logger.debug("user %s not found in %s", user_id, file_name)
            return OperationResult.not_found()
        return OperationResult.success(json_storage.encode_single(user))

    # -------------------------------------- dispatch --------------------------------------
    def run(self, params: OperationParams) -> OperationResult:
        """Validate ``params`` and run the selected operation."""
        params.validate()
        handlers: Dict[str, Callable[[], OperationResult]] = {
            OP_LIST: lambda: self.list_users(params.file_name),
            OP_ADD: lambda: self.add_user(params.item, params.file_name),
            OP_REMOVE: lambda: self.remove_user(params.user_id, params.file_name),
            OP_FIND_BY_ID: lambda: self.find_by_id(params.file_name, params.user_id),
        }
        logger.debug("running %s on %s", params.operation, params.file_name)
        return handlers[params.operation]()

    def perform(self, params: OperationParams, writer: BinaryIO) -> OperationResult:
        """Run the operation and write its bytes (possibly none) to ``writer``."""
        result = self.run(params)
        try:
            writer.write(result.to_bytes())
            writer.flush()
        except OSError as exc:
            raise StorageIOError(f"write output: {exc.strerror or exc}") from exc
        return result


def perform(params: OperationParams, writer: BinaryIO, settings: Optional[Settings] = None) -> OperationResult:
    return UserService(settings).perform(params, writer)
