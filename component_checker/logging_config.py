"""Logging configuration for Component Checker."""

import logging
import os
import sys
from pathlib import Path
from typing import Iterable, Optional

from .constants import LOG_LEVEL_ENV

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
QUIET_LOGGERS = ("httpx", "httpcore")


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance.

    Args:
        name: Logger name (usually __name__).

    Returns:
        Configured logger instance.
    """
    return logging.getLogger(name)


def resolve_level(verbose: bool = False) -> int:
    """Pick the log level from the --verbose flag or the environment.

    Unknown level names in the environment fall back to WARNING.
    """
    if verbose:
        return logging.DEBUG

    name = os.environ.get(LOG_LEVEL_ENV, "").strip().upper()
    level = logging.getLevelName(name) if name else None
    return level if isinstance(level, int) else logging.WARNING


def setup_logging(
    level: int = logging.WARNING,
    log_file: Optional[Path] = None,
    quiet: Iterable[str] = QUIET_LOGGERS,
) -> None:
    """Setup logging configuration.

    Args:
        level: Logging level (default: WARNING).
        log_file: Optional log file path.
        quiet: Loggers capped at WARNING regardless of ``level``.
    """
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        handlers=handlers,
    )

    for name in quiet:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
