"""User record model and lookup helpers."""
from __future__ import annotations

from typing import Iterable, Optional, Sequence

from pydantic import BaseModel, ConfigDict


class User(BaseModel):
    """One stored user. ``id`` is the intended unique key."""

    model_config = ConfigDict(strict=True, frozen=True)

    id: str
    email: str
    age: int


def find_index(users: Sequence[User], user_id: str) -> Optional[int]:
    """Return the position of the first record with ``user_id``, if any."""
    for index, user in enumerate(users):
        if user.id == user_id:
            return index
    return None


def find_user(users: Iterable[User], user_id: str) -> Optional[User]:
    for user in users:
        if user.id == user_id:
            return user
    return None


def id_exists(users: Iterable[User], user_id: str) -> bool:
    return find_user(users, user_id) is not None


def without_index(users: Sequence[User], index: int) -> list[User]:
    """Copy of ``users`` minus the record at ``index``; order is kept."""
    return list(users[:index]) + list(users[index + 1 :])
