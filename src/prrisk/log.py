"""structlog setup for the CLI."""

from __future__ import annotations

import logging
import os
import sys

import structlog

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def resolve_level(level: str | None = None) -> int:
    """Return the numeric level for `level`, falling back to LOG_LEVEL, then warning."""
    name = (level or os.environ.get("LOG_LEVEL") or "warning").lower()
    return _LEVELS.get(name, logging.WARNING)


def configure_logging(level: str | None = None) -> None:
    """Send structlog events to stderr so stdout stays machine-readable."""
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="%H:%M:%S"),
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(resolve_level(level)),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
