# src/todo_keeper/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the services.

The lifecycle manager and category registry depend on Protocols instead of the
concrete file-backed store. This keeps storage swappable and makes testing easier.
"""

from collections.abc import Sequence
from contextlib import AbstractContextManager
from typing import Any, Protocol, TypeVar


class Record(Protocol):
    def to_dict(self) -> dict[str, Any]: ...


R = TypeVar("R", bound=Record)
R_co = TypeVar("R_co", covariant=True)


class RecordType(Protocol[R_co]):
    """A record class: builds one record from a parsed JSON object."""

    def from_dict(self, raw: Any) -> R_co: ...


class CollectionRepo(Protocol):
    """
    Whole-collection persistence.

    There is no per-record update: every mutation is load, compute the new full
    collection, replace_all.
    """

    def load(self, name: str, record_type: RecordType[R]) -> list[R]: ...
    def replace_all(self, name: str, items: Sequence[Record]) -> None: ...
    def lock(self, *names: str) -> AbstractContextManager[None]: ...
