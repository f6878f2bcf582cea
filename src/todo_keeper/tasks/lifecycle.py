# src/todo_keeper/tasks/lifecycle.py

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import replace
from datetime import UTC, datetime

from ..core.ports import CollectionRepo
from ..storage.errors import NotFound
from .task_models import Task

logger = logging.getLogger(__name__)

TODOS_FILE = "todos.json"
TRASH_FILE = "trash.json"


def _utc_now_iso() -> str:
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class TaskLifecycleManager:
    """
    Moves tasks between the active and trash collections.

    Every operation works on freshly loaded snapshots and writes whole
    collections back. The locks of all touched collections are held for the full
    load-mutate-write sequence. The two writes of a move are still sequential:
    if the second one fails, the task can transiently exist in both files.

    Order inside a collection is the caller's order; `position` is never
    recomputed here.
    """

    def __init__(
        self,
        store: CollectionRepo,
        *,
        todos_file: str = TODOS_FILE,
        trash_file: str = TRASH_FILE,
    ) -> None:
        self._store = store
        self._todos_file = todos_file
        self._trash_file = trash_file

    # ---- passthroughs ----

    def load_active(self) -> list[Task]:
        return self._store.load(self._todos_file, Task)

    def save_active(self, tasks: Sequence[Task]) -> None:
        self._store.replace_all(self._todos_file, tasks)

    def load_trash(self) -> list[Task]:
        return self._store.load(self._trash_file, Task)

    def save_trash(self, tasks: Sequence[Task]) -> None:
        self._store.replace_all(self._trash_file, tasks)

    # ---- transitions ----

    def trash(self, task_id: int, *, now: str | None = None) -> Task:
        """Move an active task to the end of the trash, stamping trashed_at."""
        with self._store.lock(self._todos_file, self._trash_file):
            active = self.load_active()
            idx = _index_of(active, task_id)
            if idx is None:
                raise NotFound(task_id, "todos")

            trash = self.load_trash()
            item = replace(active.pop(idx), trashed_at=now or _utc_now_iso())
            trash.append(item)

            self.save_trash(trash)
            self.save_active(active)

        logger.info("Task %s moved to trash", task_id)
        return item

    def restore(self, task_id: int) -> Task:
        """Move a trashed task to the end of the active collection, clearing trashed_at."""
        with self._store.lock(self._todos_file, self._trash_file):
            trash = self.load_trash()
            idx = _index_of(trash, task_id)
            if idx is None:
                raise NotFound(task_id, "trash")

            active = self.load_active()
            item = replace(trash.pop(idx), trashed_at=None)
            active.append(item)

            self.save_trash(trash)
            self.save_active(active)

        logger.info("Task %s restored from trash", task_id)
        return item

    def delete_permanently(self, task_id: int) -> None:
        with self._store.lock(self._trash_file):
            trash = self.load_trash()
            idx = _index_of(trash, task_id)
            if idx is None:
                raise NotFound(task_id, "trash")
            del trash[idx]
            self.save_trash(trash)

        logger.info("Task %s permanently deleted", task_id)

    def empty_trash(self) -> None:
        with self._store.lock(self._trash_file):
            self.save_trash([])
        logger.info("Trash emptied")

    def trash_completed(self, *, now: str | None = None) -> list[Task]:
        """
        Move every completed active task to the trash ("clear completed").

        Moved tasks share one trashed_at stamp and keep their relative order.
        Nothing is written when no task is completed.
        """
        with self._store.lock(self._todos_file, self._trash_file):
            active = self.load_active()
            done = [t for t in active if t.completed]
            if not done:
                return []

            stamp = now or _utc_now_iso()
            moved = [replace(t, trashed_at=stamp) for t in done]
            trash = self.load_trash()
            trash.extend(moved)

            self.save_trash(trash)
            self.save_active([t for t in active if not t.completed])

        logger.info("Moved %d completed tasks to trash", len(moved))
        return moved


def _index_of(tasks: Sequence[Task], task_id: int) -> int | None:
    for i, t in enumerate(tasks):
        if t.id == task_id:
            return i
    return None
