"""Structured logging for HabitGrove."""

from __future__ import annotations

import logging
import sys

import structlog
from structlog.stdlib import BoundLogger


def setup_logging(level: str = "INFO", json_format: bool = False) -> None:
    """Configure structlog on top of stdlib logging.

    Interactive surfaces use the console renderer; services can ask for JSON.
    """
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if json_format:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, level.upper(), logging.INFO),
        stream=sys.stderr,
    )


def get_logger(name: str) -> BoundLogger:
    """Get a structured logger instance (usually ``get_logger(__name__)``)."""
    return structlog.get_logger(name)
