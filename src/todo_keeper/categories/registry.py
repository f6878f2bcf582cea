# src/todo_keeper/categories/registry.py

from __future__ import annotations

import logging
from collections.abc import Sequence

from ..core.ports import CollectionRepo
from .category_models import Category

logger = logging.getLogger(__name__)

CATEGORIES_FILE = "categories.json"


class CategoryRegistry:
    """
    Category taxonomy persistence.

    No cascade: removing a category leaves tasks that embedded a copy of it
    untouched, and children whose parent_id pointed at it keep the dangling id.
    """

    def __init__(self, store: CollectionRepo, *, categories_file: str = CATEGORIES_FILE) -> None:
        self._store = store
        self._categories_file = categories_file

    def load_categories(self) -> list[Category]:
        return self._store.load(self._categories_file, Category)

    def save_categories(self, categories: Sequence[Category]) -> None:
        self._store.replace_all(self._categories_file, categories)
        logger.debug("Saved %d categories", len(categories))

    def root_categories(self) -> list[Category]:
        return [c for c in self.load_categories() if c.parent_id is None]

    def subcategories(self, parent_id: int) -> list[Category]:
        return [c for c in self.load_categories() if c.parent_id == parent_id]
