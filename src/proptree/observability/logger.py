"""Structured logging setup.

Library modules log through ``logging.getLogger(__name__)``; this module
routes those records through structlog so applications get JSON (or
console) output with the logger name and level attached.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from proptree.core.config import Settings
from proptree.core.enums import LogFormat


def _add_component(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Structlog processor: tag entries with the top-level package name."""
    name = event_dict.get("logger", "")
    event_dict.setdefault("component", name.split(".", 1)[0] if name else "")
    return event_dict


def setup_logging(
    level: str = "INFO",
    format: str | LogFormat = LogFormat.JSON,
) -> None:
    """Configure structured logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR).
        format: "json" for production, "console" for development.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        _add_component,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if LogFormat(format) == LogFormat.JSON:
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
        stream=sys.stderr,
        level=log_level,
    )
    logging.getLogger().setLevel(log_level)


def configure(settings: Settings) -> None:
    """Apply the observability section of *settings*."""
    obs = settings.observability
    setup_logging(level=obs.log_level, format=obs.log_format)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger for a module."""
    return structlog.get_logger(name)
