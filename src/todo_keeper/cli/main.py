# src/todo_keeper/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, then runs the console REPL in the main thread.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ..cli.bootstrap import create_initial_state
from ..config import Settings, get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging
from ..storage.errors import DirectoryUnavailable
from ..storage.paths import default_data_dir

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> Path | None:
    """
    Set up logging from settings and return the log dir actually used.

    File logging is best-effort: if the log dir cannot be resolved, created or
    opened, the app keeps running with console logging only.
    """
    level_name = str(settings.log_level).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    log_dir: Path | None = None
    if settings.log_to_file:
        try:
            log_dir = settings.log_dir or default_data_dir()
        except DirectoryUnavailable:
            # Commands will report the data dir problem themselves.
            log_dir = None

    if log_dir is not None:
        try:
            setup_logging(log_dir=log_dir, console_level=console_level)
            return log_dir
        except OSError as e:
            setup_logging(log_dir=None, console_level=console_level)
            logger.warning("File logging disabled, cannot use %s: %s", log_dir, e)
            return None

    setup_logging(log_dir=None, console_level=console_level)
    return None


def main() -> None:
    settings = get_settings()
    configure_logging(settings)

    logger.info("Starting %s...", settings.app_name)

    state = create_initial_state(settings=settings)
    try:
        run_console_loop(state)
    finally:
        logger.info("Bye.")


if __name__ == "__main__":
    main()
