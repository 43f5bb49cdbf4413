"""Logging configuration and utilities.

Console output goes to stderr with a short format so it never mixes
with the report printed on stdout. The optional log file keeps the
full format and rotates.
"""

import contextlib
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

NAMESPACE = "jump_marker"
CONSOLE_FORMAT = "%(levelname)s: %(message)s"
FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"

# Decoder and event-loop chatter is only useful when debugging those libraries
QUIET_LOGGERS = ("cv2", "asyncio")


def setup_logging(
    level: str = "INFO",
    log_file: str | None = None,
    *,
    max_bytes: int = 1024 * 1024,
    backup_count: int = 2,
) -> logging.Logger:
    """Configure logging for the jump_marker namespace.

    Safe to call repeatedly; earlier handlers are closed and replaced.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to a rotating log file
        max_bytes: Size at which the log file rotates
        backup_count: Rotated files to keep

    Returns:
        The configured namespace logger
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    app_logger = logging.getLogger(NAMESPACE)
    app_logger.setLevel(log_level)
    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)
        with contextlib.suppress(Exception):
            handler.close()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    app_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(log_level)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=FILE_DATEFMT))
        app_logger.addHandler(file_handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return app_logger


def get_logger(name: str) -> logging.Logger:
    """Logger for a module, always under the jump_marker namespace."""
    if not name.startswith(NAMESPACE):
        name = f"{NAMESPACE}.{name}"
    return logging.getLogger(name)
