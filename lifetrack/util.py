"""Helpers for optional values and SQL parameters."""

from __future__ import annotations

from typing import Any, TypeVar

T = TypeVar("T")

_SCALARS = (bool, int, float, complex, str, bytes)


def _is_zero(value: Any) -> bool:
    """Tell whether a value is the zero value of its type."""
    if value is None:
        return True
    if isinstance(value, _SCALARS):
        return not value
    try:
        return bool(value == type(value)())
    except TypeError:
        return False


def value_if(value: T, condition: bool) -> T | None:
    """Return the value when the condition holds, otherwise None."""
    return value if condition else None


def none_if_zero(value: T) -> T | None:
    """Return the value unless it is the zero value of its type."""
    return None if _is_zero(value) else value


def none_if_empty(text: str) -> str | None:
    """Return the text unless it is empty."""
    return text if text != "" else None


def value_or(value: T | None, default: T) -> T:
    """Return the value, or the default when the value is None."""
    return default if value is None else value


def null_if_zero(value: Any) -> Any:
    """Turn a zero value into NULL for use as a query parameter."""
    return none_if_zero(value)