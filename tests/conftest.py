# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from todo_keeper.cli.bootstrap import create_initial_state
from todo_keeper.core.state import AppState
from todo_keeper.storage.collection_store import FileCollectionStore
from todo_keeper.storage.paths import PathResolver


@pytest.fixture()
def data_dir(tmp_path: Path) -> Path:
    # Deliberately not created: the store must create it on demand.
    return tmp_path / "app-data"


@pytest.fixture()
def settings(data_dir: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with bootstrap/AppState.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment and any .env file.
    """
    return SimpleNamespace(
        app_name="todo-keeper-test",
        log_level="DEBUG",
        log_to_file=False,
        data_dir=data_dir,
        log_dir=None,
        pretty_threshold=100,
        stream_threshold_bytes=10 * 1024,
    )


@pytest.fixture()
def store(data_dir: Path) -> FileCollectionStore:
    return FileCollectionStore(PathResolver(data_dir))


@pytest.fixture()
def state(settings: SimpleNamespace) -> AppState:
    """AppState wired with the real file-backed store under tmp_path."""
    return create_initial_state(settings=settings)
