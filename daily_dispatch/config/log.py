"""structlog setup for the command-line entry points."""

import logging

import structlog

from .settings import settings


def configure_logging(level: str = None) -> None:
    """Drop events below the configured level (DD_LOG_LEVEL)."""
    numeric_level = logging.getLevelName((level or settings.log_level).upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
    )
