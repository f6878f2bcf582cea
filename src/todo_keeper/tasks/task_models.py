# src/todo_keeper/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from ..categories.category_models import Category
from ..core.records import RecordError, as_bool, as_object, as_str, as_u64, as_uint, optional, require

# External key for the trash timestamp; the trash window reads this name.
TRASHED_AT_KEY = "trashedAt"


def _as_category(key: str, value: Any) -> Category:
    try:
        return Category.from_dict(value)
    except RecordError as e:
        raise RecordError(f"`{key}`: {e}") from e


@dataclass(frozen=True, slots=True)
class Task:
    """
    A todo item.

    `category` is an embedded snapshot of the category at assignment time, not a
    reference: later registry edits do not reach tasks that already embed it.
    `trashed_at` is set exactly while the task lives in the trash collection.
    """

    id: int
    text: str
    completed: bool
    created_at: str
    position: int
    due_date: str | None = None
    category: Category | None = None
    trashed_at: str | None = None

    @property
    def is_trashed(self) -> bool:
        return self.trashed_at is not None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "id": self.id,
            "text": self.text,
            "completed": self.completed,
            "created_at": self.created_at,
        }
        if self.due_date is not None:
            out["due_date"] = self.due_date
        if self.category is not None:
            out["category"] = self.category.to_dict()
        out["position"] = self.position
        if self.trashed_at is not None:
            out[TRASHED_AT_KEY] = self.trashed_at
        return out

    @classmethod
    def from_dict(cls, raw: Any) -> Task:
        obj: Mapping[str, Any] = as_object(raw)
        return cls(
            id=as_u64("id", require(obj, "id")),
            text=as_str("text", require(obj, "text")),
            completed=as_bool("completed", require(obj, "completed")),
            created_at=as_str("created_at", require(obj, "created_at")),
            position=as_uint("position", require(obj, "position")),
            due_date=optional(obj, "due_date", as_str),
            category=optional(obj, "category", _as_category),
            trashed_at=optional(obj, TRASHED_AT_KEY, as_str),
        )
