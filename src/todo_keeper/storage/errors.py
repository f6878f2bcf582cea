# src/todo_keeper/storage/errors.py

"""
Storage error taxonomy.

Every error renders to a message suitable for direct display, so the command
surface can hand `str(err)` straight to the caller.
"""

from __future__ import annotations


class TodoStoreError(Exception):
    """Base class for every failure raised by the persistence layer."""


class DirectoryUnavailable(TodoStoreError):
    """The data directory cannot be resolved or created. Not retryable."""


class IoFailure(TodoStoreError):
    """Open/read/write failure on a resolvable path."""


class MalformedDocument(TodoStoreError):
    def __init__(self, filename: str, diagnostic: str) -> None:
        self.filename = filename
        self.diagnostic = diagnostic
        super().__init__(f"Failed to parse {filename}: {diagnostic}")


class NotFound(TodoStoreError):
    def __init__(self, record_id: int, collection: str) -> None:
        self.record_id = record_id
        self.collection = collection
        super().__init__(f"Item with id {record_id} not found in {collection}")
