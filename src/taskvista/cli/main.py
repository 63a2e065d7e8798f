# src/taskvista/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, then runs the console view
in the main thread until /exit, EOF or Ctrl+C.
"""

from __future__ import annotations

import logging

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging
from ..storage.local_storage import StorageError

logger = logging.getLogger(__name__)


def _shutdown(state) -> None:
    """Best-effort shutdown (no exceptions should escape)."""
    # LocalStorage uses short-lived sqlite connections per call; close() is a hook only.
    try:
        state.task_store.close()
    except StorageError:
        logger.debug("Storage close failed.", exc_info=True)


def main() -> None:
    settings = get_settings()

    # choose console log level from settings.log_level
    level_name = str(getattr(settings, "log_level", "WARNING")).upper()
    console_level = getattr(logging, level_name, logging.WARNING)

    log_file = setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info("Starting %s... (log file %s)", settings.app_name, log_file)

    try:
        state = create_initial_state(settings=settings)
    except StorageError as e:
        # The storage file itself could not be opened; nothing to run against.
        logger.error("Cannot open task storage at %s: %s", settings.storage_path, e)
        raise SystemExit(1) from e

    try:
        run_console_loop(state)
    finally:
        _shutdown(state)
        logger.info("Bye.")


if __name__ == "__main__":
    main()
