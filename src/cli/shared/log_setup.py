"""Loguru configuration for internal execution traces."""

from __future__ import annotations

import sys

from loguru import logger

from .console import LogLevel


def configure_logging(level: LogLevel) -> None:
    """Route loguru traces to stderr for the verbose console levels.

    Every command line the runner executes is traced at DEBUG; those traces
    are only useful when the console itself is at debug or info.
    """
    logger.remove()
    if level >= LogLevel.DEBUG:
        logger.add(
            sys.stderr,
            level="DEBUG",
            format="<dim>{time:HH:mm:ss}</dim> <level>{level: <7}</level> {message}",
        )
