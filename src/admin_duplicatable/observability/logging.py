"""Structured logging configuration for resource duplication.

This module provides structured logging using structlog to emit
JSON-formatted logs with contextual information such as the resource
name, the duplication strategy and the source and duplicate ids.

Examples:
    Configure logging::

        from admin_duplicatable.observability.logging import configure_logging

        configure_logging(level="INFO", json_output=True)

    Use the logger inside a duplication context::

        from admin_duplicatable.observability.logging import (
            bound_duplication_context,
            get_logger,
        )

        logger = get_logger(__name__)
        with bound_duplication_context("posts", "save"):
            logger.info("duplication.succeeded", source_id=1, duplicate_id=7)

    Output (JSON)::

        {
            "event": "duplication.succeeded",
            "resource": "posts",
            "strategy": "save",
            "source_id": 1,
            "duplicate_id": 7,
            "timestamp": "2024-01-01T00:00:00.000000Z",
            "level": "info"
        }
"""

import logging
import sys
from contextlib import AbstractContextManager
from typing import Any

import structlog


def configure_logging(
    level: str = "INFO",
    json_output: bool = True,
) -> None:
    """Configure structured logging for the application.

    Call once at application startup.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_output: If True, emit JSON logs; if False, use console format

    Examples:
        >>> configure_logging(level="DEBUG", json_output=False)
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper()),
    )

    processors: list[object] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]

    if json_output:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,  # type: ignore[arg-type]
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, level.upper())),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> Any:
    """Get a structured logger instance.

    Args:
        name: Logger name (typically __name__ from the calling module)

    Returns:
        A structlog logger instance
    """
    return structlog.get_logger(name)


def bound_duplication_context(resource: str, strategy: str) -> AbstractContextManager[Any]:
    """Bind the resource and strategy to every log event in the block.

    Args:
        resource: Screen name, e.g. ``posts``
        strategy: Duplication strategy value, ``form`` or ``save``

    Examples:
        >>> with bound_duplication_context("posts", "save"):
        ...     logger.info("duplication.succeeded", source_id=1, duplicate_id=7)
    """
    return structlog.contextvars.bound_contextvars(resource=resource, strategy=strategy)
