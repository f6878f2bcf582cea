# src/todo_keeper/storage/codec.py

"""
JSON document codec for homogeneous collections.

A collection file is a JSON array of records. Small collections are written
indented so the files stay readable when opened by hand; from PRETTY_THRESHOLD
records on, the compact form is used. Both forms decode to the same records.
"""

from __future__ import annotations

import io
import json
from collections.abc import Sequence
from typing import IO, Any

from ..core.ports import Record, RecordType, R
from ..core.records import RecordError
from .errors import MalformedDocument

PRETTY_THRESHOLD = 100


def _reject_constant(name: str) -> Any:
    # NaN / Infinity are not JSON.
    raise ValueError(f"invalid JSON constant {name}")


def encode(
    items: Sequence[Record],
    *,
    pretty_threshold: int = PRETTY_THRESHOLD,
    source: str = "<memory>",
) -> bytes:
    payload = [item.to_dict() for item in items]
    if len(payload) < pretty_threshold:
        text = json.dumps(payload, ensure_ascii=False, indent=2)
    else:
        text = json.dumps(payload, ensure_ascii=False, separators=(",", ":"))
    try:
        return text.encode("utf-8")
    except UnicodeEncodeError as e:
        # Records built in code bypass the field readers; refuse instead of writing a broken file.
        raise MalformedDocument(source, f"cannot encode as UTF-8: {e.reason}") from e


def decode(data: bytes | str, record_type: RecordType[R], *, source: str = "<memory>") -> list[R]:
    """
    Decode a collection document.

    Empty or whitespace-only input is an empty collection. Anything else must be
    a strict JSON array of records; every failure raises MalformedDocument.
    """
    if isinstance(data, bytes):
        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedDocument(source, f"invalid UTF-8: {e}") from e
    else:
        text = data

    if not text.strip():
        return []

    try:
        raw = json.loads(text, parse_constant=_reject_constant)
    except ValueError as e:
        # json.JSONDecodeError is a ValueError subclass
        raise MalformedDocument(source, str(e)) from e
    except RecursionError as e:
        raise MalformedDocument(source, "recursion limit exceeded") from e

    return _records_from_json(raw, record_type, source)


def decode_stream(fp: IO[bytes], record_type: RecordType[R], *, source: str = "<stream>") -> list[R]:
    """
    Decode from a binary file object (used for larger files).

    Reading goes through the caller's buffered file object, but the document is
    still parsed in one piece: the whole text is read, then handed to decode().
    """
    reader = io.TextIOWrapper(fp, encoding="utf-8", errors="strict")
    try:
        text = reader.read()
    except UnicodeDecodeError as e:
        raise MalformedDocument(source, f"invalid UTF-8: {e}") from e
    finally:
        # The caller owns fp; detach so closing the wrapper does not close it.
        reader.detach()
    return decode(text, record_type, source=source)


def _records_from_json(raw: Any, record_type: RecordType[R], source: str) -> list[R]:
    if not isinstance(raw, list):
        raise MalformedDocument(source, f"expected a JSON array, got {type(raw).__name__}")

    out: list[R] = []
    for idx, item in enumerate(raw):
        try:
            out.append(record_type.from_dict(item))
        except RecordError as e:
            raise MalformedDocument(source, f"record {idx}: {e}") from e
    return out
