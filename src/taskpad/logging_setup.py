# src/taskpad/logging_setup.py

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOG_FILE_NAME = "taskpad.log"
LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"

# Rotate at 1 MiB, keep three old files next to the database.
MAX_LOG_BYTES = 1_048_576
LOG_BACKUPS = 3


class _ConsoleNoiseFilter(logging.Filter):
    """
    Console shows every taskpad record that passed the level check;
    anything else (captured warnings, libraries) only from ERROR up.
    """

    def __init__(self, app_prefix: str = "taskpad") -> None:
        super().__init__()
        self._prefix = app_prefix

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name
        if name == self._prefix or name.startswith(self._prefix + "."):
            return True
        return record.levelno >= logging.ERROR


def _formatter() -> logging.Formatter:
    return logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)


def _console_handler(level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(_formatter())
    handler.addFilter(_ConsoleNoiseFilter())
    return handler


def _file_handler(path: Path, level: int) -> logging.Handler:
    handler = RotatingFileHandler(
        str(path), maxBytes=MAX_LOG_BYTES, backupCount=LOG_BACKUPS, encoding="utf-8"
    )
    handler.setLevel(level)
    handler.setFormatter(_formatter())
    return handler


def setup_logging(
    *,
    log_dir: str | Path = ".local/taskpad",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
    log_file_name: str = LOG_FILE_NAME,
) -> Path:
    """
    Replace the root handlers with a filtered stderr handler and a rotating
    file handler, and route warnings.warn(...) through logging.

    Returns the path of the active log file. Call once, before the first
    record is emitted.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / log_file_name

    root = logging.getLogger()
    root.setLevel(min(console_level, file_level))

    for old in list(root.handlers):
        root.removeHandler(old)
        old.close()

    root.addHandler(_console_handler(console_level))
    root.addHandler(_file_handler(log_file, file_level))

    logging.captureWarnings(True)
    return log_file
