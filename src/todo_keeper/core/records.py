# src/todo_keeper/core/records.py

"""
Field readers shared by record types.

Records arrive as parsed JSON objects. Each reader either returns a value of the
expected Python type or raises RecordError naming the offending key; the codec
turns RecordError into MalformedDocument with the file name attached.
"""

from __future__ import annotations

from typing import Any, Mapping

U64_MAX = 2**64 - 1


class RecordError(ValueError):
    """A JSON object does not match the expected record shape."""


def require(obj: Mapping[str, Any], key: str) -> Any:
    if key not in obj:
        raise RecordError(f"missing field `{key}`")
    return obj[key]


def as_u64(key: str, value: Any) -> int:
    # bool is an int subclass; JSON true/false is never an id.
    if isinstance(value, bool) or not isinstance(value, int):
        raise RecordError(f"invalid type for `{key}`: expected u64, got {type(value).__name__}")
    if value < 0 or value > U64_MAX:
        raise RecordError(f"invalid value for `{key}`: {value} out of range for u64")
    return value


def as_uint(key: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise RecordError(f"invalid type for `{key}`: expected unsigned integer, got {type(value).__name__}")
    if value < 0:
        raise RecordError(f"invalid value for `{key}`: {value} is negative")
    return value


def as_str(key: str, value: Any) -> str:
    if not isinstance(value, str):
        raise RecordError(f"invalid type for `{key}`: expected string, got {type(value).__name__}")
    try:
        value.encode("utf-8")
    except UnicodeEncodeError as e:
        # lone surrogates such as \ud800 cannot be written back as UTF-8
        raise RecordError(f"invalid value for `{key}`: {e.reason}") from e
    return value


def as_bool(key: str, value: Any) -> bool:
    if not isinstance(value, bool):
        raise RecordError(f"invalid type for `{key}`: expected boolean, got {type(value).__name__}")
    return value


def optional(obj: Mapping[str, Any], key: str, reader) -> Any:
    """Absent key and JSON null both mean "not present"."""
    value = obj.get(key)
    if value is None:
        return None
    return reader(key, value)


def as_object(value: Any) -> Mapping[str, Any]:
    if not isinstance(value, dict):
        raise RecordError(f"expected an object, got {type(value).__name__}")
    return value
