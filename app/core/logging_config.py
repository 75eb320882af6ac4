"""
Structured logging configuration using structlog.

JSON output in production (searchable/aggregatable), colored console output
everywhere else.

Usage:
    from app.core.logging_config import get_logger

    logger = get_logger(__name__)
    logger.info("blog created", blog_id="8c1f...")

Output in production (JSON):
    {"event": "blog created", "blog_id": "8c1f...", "request_id": "req_...",
     "timestamp": "2024-01-01T12:00:00Z", "level": "info"}
"""

import logging
import sys
from typing import Any

import structlog

IS_TEST = "pytest" in sys.modules


def configure_logging(level: str = "INFO", json_output: bool = False) -> None:
    """Configure structlog with processors for the given environment."""
    log_level = logging.getLevelName(level.upper())
    if not isinstance(log_level, int):
        log_level = logging.INFO

    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if json_output:
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = shared_processors + [
            structlog.dev.ConsoleRenderer(colors=not IS_TEST),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # Route third-party stdlib logging to stdout at the same level
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )

    # Reduce noise from chatty libraries
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (typically __name__)
    """
    return structlog.get_logger(name)
