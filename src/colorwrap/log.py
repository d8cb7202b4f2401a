"""Logging setup for the command line entry point."""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def resolve_level(level_name: str, verbosity: int = 0) -> int:
    """Get the effective level; each -v lowers it one step, down to DEBUG."""
    level = getattr(logging, level_name.upper(), logging.WARNING)
    if verbosity >= 2:
        return min(level, logging.DEBUG)
    if verbosity == 1:
        return min(level, logging.INFO)
    return level


def configure_logging(
    level_name: str = "WARNING",
    verbosity: int = 0,
    log_file: Path | None = None,
) -> int:
    """Configure root logging. Diagnostics go to stderr, never stdout.

    Args:
        level_name: Configured level name
        verbosity: Number of -v flags
        log_file: Optional file receiving the same records

    Returns:
        The effective level
    """
    level = resolve_level(level_name, verbosity)
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    handlers: list[logging.Handler] = []

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    handlers.append(console_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=5 * 1024 * 1024,
            backupCount=3,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    logging.basicConfig(level=level, handlers=handlers)
    return level
