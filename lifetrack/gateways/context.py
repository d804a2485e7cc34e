"""The database and user bound to the current call."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any

_database: ContextVar[Any] = ContextVar("database", default=None)
_user_id: ContextVar[int] = ContextVar("user_id", default=0)


@contextmanager
def use_db(db: Any) -> Iterator[Any]:
    """Make db the current database for the duration of the block."""
    token = _database.set(db)
    try:
        yield db
    finally:
        _database.reset(token)


@contextmanager
def use_user_id(user_id: int) -> Iterator[int]:
    """Make user_id the current user for the duration of the block."""
    if isinstance(user_id, bool) or not isinstance(user_id, int):
        raise TypeError(f"user id must be an integer, got {type(user_id).__name__}")
    token = _user_id.set(user_id)
    try:
        yield user_id
    finally:
        _user_id.reset(token)


def current_db() -> Any:
    """The current database, or None when none is bound."""
    return _database.get()


def current_user_id() -> int:
    """The current user id, or 0 when none is bound."""
    return _user_id.get()