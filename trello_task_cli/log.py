"""Logging setup for trello-task-cli.

Command output goes to stdout with ``print``; this module only covers the
diagnostic stream on stderr and the optional rotating log file.
"""

from __future__ import annotations

import logging
import re
from logging.handlers import RotatingFileHandler
from pathlib import Path

ROOT_LOGGER = "trello_task_cli"

DEFAULT_MAX_BYTES = 1024 * 1024
DEFAULT_BACKUP_COUNT = 3

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_SECRET_PARAMS = re.compile(r"\b(key|token)=[^&\s'\"]+")


def setup_logging(
    level: str = "WARNING",
    log_file: str | Path | None = None,
    console: bool = True,
) -> logging.Logger:
    """Configure the package logger and return it.

    Args:
        level: Level name (DEBUG, INFO, WARNING, ERROR). Unknown names fall
            back to WARNING.
        log_file: Optional path of a rotating log file.
        console: Whether to log to stderr.

    Returns:
        The ``trello_task_cli`` logger.
    """
    log_level = getattr(logging, str(level).upper(), logging.WARNING)

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(log_level)
    logger.propagate = False

    # Remove existing handlers to avoid duplicates
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=DEFAULT_MAX_BYTES,
            backupCount=DEFAULT_BACKUP_COUNT,
            encoding="utf-8",
        )
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if console:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(log_level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if not logger.handlers:
        logger.addHandler(logging.NullHandler())

    logger.debug("Logging initialized (level=%s, file=%s)", logging.getLevelName(log_level), log_file)
    return logger


def get_logger(name: str) -> logging.Logger:
    """Return a child of the package logger, e.g. ``trello_task_cli.client``."""
    if not name.startswith(f"{ROOT_LOGGER}."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)


def sanitize_for_log(text: str) -> str:
    """Redact ``key=`` and ``token=`` values from text bound for the log."""
    return _SECRET_PARAMS.sub(lambda m: f"{m.group(1)}=[REDACTED]", text)
