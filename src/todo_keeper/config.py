# src/todo_keeper/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Nothing touches the file system at import time: the data directory is only
  resolved (and created) when a command first needs it.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from .storage.codec import PRETTY_THRESHOLD
from .storage.collection_store import STREAM_THRESHOLD_BYTES

ENV_PREFIX = "TODO_KEEPER"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path | None) -> Path | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    log_to_file: bool

    # ---- Local data paths ----
    # None means the per-user default (see storage.paths.default_data_dir).
    data_dir: Path | None
    log_dir: Path | None

    # ---- Storage tuning ----
    pretty_threshold: int
    stream_threshold_bytes: int

    @staticmethod
    def from_env() -> "Settings":
        data_dir = _env_path(_k("DATA_DIR"), None)
        return Settings(
            app_name=_env(_k("APP_NAME"), "todo-keeper"),
            log_level=_env(_k("LOG_LEVEL"), "INFO"),
            log_to_file=_env_bool(_k("LOG_TO_FILE"), True),
            data_dir=data_dir,
            log_dir=_env_path(_k("LOG_DIR"), data_dir),
            pretty_threshold=max(0, _env_int(_k("PRETTY_THRESHOLD"), PRETTY_THRESHOLD)),
            stream_threshold_bytes=max(0, _env_int(_k("STREAM_THRESHOLD_BYTES"), STREAM_THRESHOLD_BYTES)),
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
