"""
Structured logging configuration.

- development: colourless console rendering
- production: one JSON object per line

Logs go to stderr so command output on stdout stays clean.

Usage:
    from calcflow.logging_config import setup_logging
    import structlog

    setup_logging(Settings.from_env())
    logger = structlog.get_logger(__name__)
    logger.debug("calculator.transition", display="3")
"""

from __future__ import annotations
import logging
import sys

import structlog

from .config import Settings


def setup_logging(settings: Settings | None = None) -> None:
    """Configure structlog for the process. Safe to call more than once."""
    settings = settings or Settings.from_env()
    level = getattr(logging, settings.log_level, logging.WARNING)

    shared_processors: list = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if settings.is_production:
        shared_processors.append(structlog.processors.JSONRenderer())
    else:
        shared_processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=shared_processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
