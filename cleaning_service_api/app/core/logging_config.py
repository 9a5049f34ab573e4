"""
Logging configuration for the API process.

``setup_logging`` attaches one console handler and, when ``LOG_FILE``
is set, one size‑rotated file handler to the application's own
``cleaning_service_api`` logger and to Uvicorn's server and access
loggers, so request lines and application messages end up in the same
place with the same format.  ``run.py`` starts Uvicorn with
``log_config=None`` so these handlers are not replaced.

Calling ``setup_logging`` again swaps the previously installed
handlers for new ones; other handlers (e.g. pytest's) are left alone.
"""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import List, Optional

from .config import settings


LOGGER_NAMES = ("cleaning_service_api", "uvicorn.error", "uvicorn.access")

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_installed: List[logging.Handler] = []


def _build_handlers(logfile: Optional[str], max_bytes: int, backup_count: int) -> List[logging.Handler]:
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if logfile:
        log_path = Path(logfile).resolve()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            RotatingFileHandler(log_path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8")
        )
    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def setup_logging(
    level: str = "INFO",
    logfile: Optional[str] = None,
    max_bytes: Optional[int] = None,
    backup_count: Optional[int] = None,
) -> None:
    """Route application and Uvicorn logs to the console and an optional file.

    Parameters
    ----------
    level : str
        Level name for the application logger (e.g. ``"DEBUG"``).
        Unknown names fall back to ``INFO``.
    logfile : Optional[str]
        File to append to.  Rotated once it reaches ``max_bytes``
        (default ``settings.log_max_bytes``), keeping ``backup_count``
        old files (default ``settings.log_backup_count``).
    """
    if max_bytes is None:
        max_bytes = settings.log_max_bytes
    if backup_count is None:
        backup_count = settings.log_backup_count

    for name in LOGGER_NAMES:
        logger = logging.getLogger(name)
        for handler in _installed:
            logger.removeHandler(handler)
    for handler in _installed:
        handler.close()
    _installed[:] = _build_handlers(logfile, max_bytes, backup_count)

    numeric_level = getattr(logging, level.upper(), logging.INFO)
    for name in LOGGER_NAMES:
        logger = logging.getLogger(name)
        for handler in _installed:
            logger.addHandler(handler)
        # Handled here; the root logger would print them a second time.
        logger.propagate = False
    logging.getLogger("cleaning_service_api").setLevel(numeric_level)
    logging.getLogger("uvicorn.error").setLevel(logging.INFO)
    logging.getLogger("uvicorn.access").setLevel(logging.INFO)
