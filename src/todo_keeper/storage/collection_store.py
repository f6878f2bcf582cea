# src/todo_keeper/storage/collection_store.py

from __future__ import annotations

import contextlib
import logging
import os
import threading
from collections.abc import Iterator, Sequence
from pathlib import Path

from ..core.ports import Record, RecordType, R
from . import codec
from .errors import IoFailure
from .paths import PathResolver

logger = logging.getLogger(__name__)

STREAM_THRESHOLD_BYTES = 10 * 1024
_STREAM_BUFFER_SIZE = 1024 * 1024


class FileCollectionStore:
    """
    JSON-file collection store.

    Each named collection is one JSON document in the data directory. The file
    system is the single source of truth: nothing is cached between calls.

    Thread-safety:
    - one re-entrant lock per collection name
    - lock(a, b) acquires in sorted order, so multi-collection operations
      cannot deadlock against each other
    - no cross-process locking
    """

    def __init__(
        self,
        resolver: PathResolver | None = None,
        *,
        pretty_threshold: int = codec.PRETTY_THRESHOLD,
        stream_threshold_bytes: int = STREAM_THRESHOLD_BYTES,
    ) -> None:
        self._resolver = resolver or PathResolver()
        self._pretty_threshold = int(pretty_threshold)
        self._stream_threshold_bytes = int(stream_threshold_bytes)
        self._locks: dict[str, threading.RLock] = {}
        self._locks_guard = threading.Lock()

    @property
    def resolver(self) -> PathResolver:
        return self._resolver

    # ---- locking ----

    def _lock_for(self, name: str) -> threading.RLock:
        with self._locks_guard:
            lock = self._locks.get(name)
            if lock is None:
                lock = threading.RLock()
                self._locks[name] = lock
            return lock

    @contextlib.contextmanager
    def lock(self, *names: str) -> Iterator[None]:
        with contextlib.ExitStack() as stack:
            for name in sorted(set(names)):
                stack.enter_context(self._lock_for(name))
            yield

    # ---- public API ----

    def load(self, name: str, record_type: RecordType[R]) -> list[R]:
        with self.lock(name):
            path = self._resolver.resolve(name)
            try:
                size = path.stat().st_size
            except FileNotFoundError:
                logger.debug("Data file %s not found, returning empty list.", name)
                return []
            except OSError as e:
                raise IoFailure(f"Failed to open {name}: {e}") from e

            try:
                if size < self._stream_threshold_bytes:
                    items = codec.decode(path.read_bytes(), record_type, source=name)
                else:
                    with path.open("rb", buffering=_STREAM_BUFFER_SIZE) as fp:
                        items = codec.decode_stream(fp, record_type, source=name)
            except FileNotFoundError:
                # Removed between stat() and open().
                logger.debug("Data file %s vanished, returning empty list.", name)
                return []
            except OSError as e:
                raise IoFailure(f"Failed to read {name}: {e}") from e

            logger.debug("Loaded %d records from %s (%d bytes)", len(items), name, size)
            return items

    def replace_all(self, name: str, items: Sequence[Record]) -> None:
        with self.lock(name):
            path = self._resolver.resolve(name)
            data = codec.encode(items, pretty_threshold=self._pretty_threshold, source=name)
            self._write_atomic(name, path, data)
            logger.debug("Saved %d records to %s (%d bytes)", len(items), name, len(data))

    @staticmethod
    def _write_atomic(name: str, path: Path, data: bytes) -> None:
        tmp = path.with_name(path.name + ".tmp")
        try:
            with tmp.open("wb") as fp:
                fp.write(data)
                fp.flush()
                os.fsync(fp.fileno())
            os.replace(tmp, path)
        except OSError as e:
            with contextlib.suppress(OSError):
                tmp.unlink()
            raise IoFailure(f"Failed to write data to {name}: {e}") from e
