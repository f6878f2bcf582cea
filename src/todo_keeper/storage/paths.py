# src/todo_keeper/storage/paths.py

from __future__ import annotations

import logging
import os
from pathlib import Path

from .errors import DirectoryUnavailable

logger = logging.getLogger(__name__)

DEFAULT_APP_DIR_NAME = "todo_keeper"


def default_data_dir(app_dir_name: str = DEFAULT_APP_DIR_NAME) -> Path:
    """
    Per-user application data directory.

    $XDG_DATA_HOME/<app> when XDG_DATA_HOME is set, else ~/.local/share/<app>.
    """
    xdg = os.getenv("XDG_DATA_HOME")
    if xdg and xdg.strip():
        return Path(xdg).expanduser() / app_dir_name
    try:
        home = Path.home()
    except RuntimeError as e:
        raise DirectoryUnavailable(f"Failed to get app data directory: {e}") from e
    return home / ".local" / "share" / app_dir_name


class PathResolver:
    """
    Maps a logical collection filename to a file inside the data directory.

    The directory is resolved (and created) on every call, so a directory removed
    while the process runs is simply recreated by the next command.
    """

    def __init__(self, data_dir: str | Path | None = None) -> None:
        self._data_dir = Path(data_dir).expanduser() if data_dir is not None else None

    @property
    def data_dir(self) -> Path:
        if self._data_dir is not None:
            return self._data_dir
        return default_data_dir()

    def resolve(self, filename: str) -> Path:
        if not filename or filename in (".", "..") or "/" in filename or "\\" in filename:
            raise DirectoryUnavailable(f"Invalid collection filename: {filename!r}")

        data_dir = self.data_dir.absolute()
        if not data_dir.is_dir():
            try:
                data_dir.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise DirectoryUnavailable(f"Failed to create data directory {data_dir}: {e}") from e
            logger.info("Created data directory %s", data_dir)

        return data_dir / filename
