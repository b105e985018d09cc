"""Structured logging setup for mdedit"""

import logging
import sys
from typing import Any

import structlog


LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}


def configure_logging(level: str = "WARNING") -> None:
    """Configure structlog to write human-readable events to stderr.

    Unknown level names fall back to WARNING. Core modules only emit DEBUG events
    (commands applied) and WARNING events (selection clamped), so the default
    keeps a host's output quiet.
    """
    level = level.upper()
    if level not in LOG_LEVELS:
        level = "WARNING"

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(LOG_LEVELS[level]),
        context_class=dict,
        logger_factory=structlog.WriteLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str) -> Any:
    """Get a structured logger, e.g. `get_logger(__name__).debug("toggle_mark", mark="bold")`."""
    return structlog.get_logger(name)
