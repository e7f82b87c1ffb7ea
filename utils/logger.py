"""
utils/logger.py
---------------
Logging setup for the persistence layer and its services.
Modules call `get_logger(__name__)`; the root logger is configured on first
use from LOG_LEVEL and, when LOG_FILE is set, also writes to a rotating file.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from config import LOG_FILE, LOG_LEVEL

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_MAX_BYTES = 5 * 1024 * 1024
_BACKUP_COUNT = 3
_initialized = False


def _file_handler(path: str) -> logging.Handler:
    log_path = Path(path)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    return RotatingFileHandler(
        log_path, maxBytes=_MAX_BYTES, backupCount=_BACKUP_COUNT, encoding="utf-8"
    )


def _init_logging() -> None:
    global _initialized
    if _initialized:
        return
    formatter = logging.Formatter(_LOG_FORMAT, _DATE_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if LOG_FILE:
        handlers.append(_file_handler(LOG_FILE))

    root = logging.getLogger()
    root.setLevel(getattr(logging, LOG_LEVEL, logging.INFO))
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)
    _initialized = True


def get_logger(name: str) -> logging.Logger:
    """Named logger; `name` is normally the caller's ``__name__``."""
    _init_logging()
    return logging.getLogger(name)
