# src/taskvista/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FILE_NAME = "taskvista.log"

# The REPL stamps its own output, so console records skip the date.
_CONSOLE_FORMAT = "%(levelname)s %(name)s: %(message)s"
_FILE_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"


class _ConsoleNoiseFilter(logging.Filter):
    """
    Keep the task board readable while the REPL is running.

    - taskvista.storage.*: WARNING+ only (every slot write logs at DEBUG)
    - taskvista.tasks.*: INFO+ only (each mutation is already echoed by the
      command reply; the DEBUG lines stay in the log file)
    - other taskvista loggers: everything the handler level lets through
    - captured warnings and third-party loggers: ERROR+ only
    """

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name

        if name.startswith("taskvista."):
            if name.startswith("taskvista.storage."):
                return record.levelno >= logging.WARNING
            if name.startswith("taskvista.tasks."):
                return record.levelno >= logging.INFO
            return True

        return record.levelno >= logging.ERROR


def setup_logging(
    *,
    log_dir: str | Path = ".local/taskvista",
    console_level: int = logging.WARNING,
    file_level: int = logging.DEBUG,
) -> Path:
    """
    Route logs to stderr (filtered) and to <log_dir>/taskvista.log (full).

    Corrupt task payloads and failed saves are logged with tracebacks; the
    file keeps those even when the console level hides them. Replaces any
    handlers already on the root logger. Returns the log file path.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    for h in list(root.handlers):
        root.removeHandler(h)

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(console_level)
    ch.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
    ch.addFilter(_ConsoleNoiseFilter())
    root.addHandler(ch)

    fh = logging.FileHandler(str(log_file), encoding="utf-8")
    fh.setLevel(file_level)
    fh.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    root.addHandler(fh)

    # warnings.warn(...) arrives as 'py.warnings'
    logging.captureWarnings(True)
    return log_file
