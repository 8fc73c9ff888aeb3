"""
Typed accessors for decoded JSON payloads.

The service returns arbitrary objects/arrays; these helpers fail with
JsonShapeError on a shape mismatch instead of silently returning None.
"""

from __future__ import annotations

from typing import Any

from xchain_client.core.exceptions import JsonShapeError

_MISSING = object()


def _kind(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def as_object(value: Any, *, where: str = "payload") -> dict[str, Any]:
    if not isinstance(value, dict):
        raise JsonShapeError(f"{where}: expected object, got {_kind(value)}")
    return value


def as_list(value: Any, *, where: str = "payload") -> list[Any]:
    if not isinstance(value, list):
        raise JsonShapeError(f"{where}: expected array, got {_kind(value)}")
    return value


def require(obj: Any, key: str, *, where: str = "payload") -> Any:
    """Return obj[key]; raise JsonShapeError if obj is not an object or key is missing."""
    mapping = as_object(obj, where=where)
    value = mapping.get(key, _MISSING)
    if value is _MISSING:
        raise JsonShapeError(f"{where}: missing key {key!r}")
    return value


def require_number(obj: Any, key: str, *, where: str = "payload") -> int | float:
    value = require(obj, key, where=where)
    # bool is an int subclass; the service never sends booleans for amounts
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise JsonShapeError(f"{where}.{key}: expected number, got {_kind(value)}")
    return value
