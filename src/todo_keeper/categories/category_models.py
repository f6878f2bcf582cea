# src/todo_keeper/categories/category_models.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from ..core.records import as_object, as_str, as_u64, optional, require


@dataclass(frozen=True, slots=True)
class Category:
    id: int
    name: str
    color: str
    parent_id: int | None = None  # not validated; may dangle

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"id": self.id, "name": self.name, "color": self.color}
        if self.parent_id is not None:
            out["parent_id"] = self.parent_id
        return out

    @classmethod
    def from_dict(cls, raw: Any) -> Category:
        obj: Mapping[str, Any] = as_object(raw)
        return cls(
            id=as_u64("id", require(obj, "id")),
            name=as_str("name", require(obj, "name")),
            color=as_str("color", require(obj, "color")),
            parent_id=optional(obj, "parent_id", as_u64),
        )
