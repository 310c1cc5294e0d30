"""structlog configuration for applications embedding resource collections."""

from __future__ import annotations

import logging
import os

import structlog

LOG_LEVEL_ENV = "RESOURCE_COLLECTION_LOGLEVEL"

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def resolve_log_level(debug: bool = False) -> int:
    """Pick the log level: DEBUG when requested, else the env var, else WARNING."""
    if debug:
        return logging.DEBUG
    name = os.getenv(LOG_LEVEL_ENV, "WARNING").upper()
    return _LEVELS.get(name, logging.WARNING)


def configure_logging(debug: bool = False) -> int:
    """Configure stdlib logging and structlog with the same level.

    Returns:
        The level that was applied.
    """
    level = resolve_log_level(debug)
    logging.basicConfig(level=level, format="%(message)s")
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(level),
    )
    return level
