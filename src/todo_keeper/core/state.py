# src/todo_keeper/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from ..categories.registry import CategoryRegistry
from ..config import Settings
from ..storage.collection_store import FileCollectionStore
from ..tasks.lifecycle import TaskLifecycleManager


@dataclass
class AppState:
    # Settings stay on the state so command handlers can read them.
    settings: Settings

    store: FileCollectionStore
    tasks: TaskLifecycleManager
    categories: CategoryRegistry
