"""
Logging for the PageVideo server and CLI.

Every module logs through a child of the "pagevideo" package logger
(``pagevideo.search``, ``pagevideo.retrievers.firestore``...), so a single
``setup_logger`` call at an entry point configures the whole tree. The MCP
server logs to stdout plus a date-tagged file; the CLI passes ``sys.stderr``
because its stdout carries only the result JSON.
"""
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional, TextIO

PACKAGE_LOGGER = "pagevideo"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def default_log_file(directory: Optional[Path] = None, when: Optional[datetime] = None) -> Path:
    """Server log path, one file per day: ``pagevideo_YYYYMMDD.log``."""
    date_tag = (when or datetime.now()).strftime("%Y%m%d")
    return (directory or Path.cwd()) / f"{PACKAGE_LOGGER}_{date_tag}.log"


def setup_logger(
    name: str = PACKAGE_LOGGER,
    level: str = "INFO",
    log_file: Optional[Path] = None,
    format_string: Optional[str] = None,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Configure the package logger (or a child of it) for an entry point.

    Handlers from an earlier call are closed and replaced, so the server and
    tests can reconfigure without leaking open log files.

    Args:
        name: Logger to configure, normally the "pagevideo" package logger
        level: DEBUG, INFO, WARNING, ERROR or CRITICAL; unknown names fall back to INFO
        log_file: Also append to this file (parent directories are created)
        format_string: Overrides DEFAULT_FORMAT
        stream: Console stream; stdout unless the caller reserves it for output

    Returns:
        The configured logger
    """
    logger = logging.getLogger(name)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    log_level = getattr(logging, level.upper(), logging.INFO)
    logger.setLevel(log_level)
    formatter = logging.Formatter(format_string or DEFAULT_FORMAT)

    console_handler = logging.StreamHandler(stream or sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str = PACKAGE_LOGGER) -> logging.Logger:
    """Module logger; bare names like "search" become "pagevideo.search"."""
    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)
