# src/todo_keeper/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root": it turns settings into a concrete
FileCollectionStore and wires the lifecycle manager and category registry on
top of it.
"""

from __future__ import annotations

import logging

from ..categories.registry import CategoryRegistry
from ..config import Settings, get_settings
from ..core.state import AppState
from ..storage.collection_store import FileCollectionStore
from ..storage.paths import PathResolver
from ..tasks.lifecycle import TaskLifecycleManager

logger = logging.getLogger(__name__)


def create_initial_state(*, settings: Settings | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    store = FileCollectionStore(
        PathResolver(settings.data_dir),
        pretty_threshold=settings.pretty_threshold,
        stream_threshold_bytes=settings.stream_threshold_bytes,
    )
    logger.debug("Collection store configured data_dir=%s", settings.data_dir or "<per-user default>")

    return AppState(
        settings=settings,
        store=store,
        tasks=TaskLifecycleManager(store),
        categories=CategoryRegistry(store),
    )
