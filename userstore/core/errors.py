"""Exceptions raised by the storage layer and the operation dispatcher."""

from __future__ import annotations


class UserStoreError(Exception):
    """Base class for every failure reported to the caller."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MissingParameterError(UserStoreError):
    """Raised when a required parameter is empty or unset."""

    def __init__(self, name: str):
        super().__init__(f"{name} has to be specified")
        self.name = name


class RecordFormatError(UserStoreError):
    """Raised when JSON content does not match the user record shape."""


class StorageIOError(UserStoreError):
    """Raised when opening, reading or writing a file (or the output) fails."""


class UnknownOperationError(UserStoreError):
    """Raised when the operation name is not one we know how to run."""

    def __init__(self, operation: str):
        super().__init__(f"Operation {operation} not allowed!")
        self.operation = operation
