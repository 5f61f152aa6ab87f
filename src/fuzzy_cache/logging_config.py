"""Structured logging setup.

The library only calls ``structlog.get_logger(__name__)``; applications that
want formatted output call :func:`configure_logging` once at startup.

Events use dotted names, e.g. ``cache.hit`` or ``embedding.miss``.
"""

from __future__ import annotations

import logging
import sys

import structlog
from structlog.types import Processor

from fuzzy_cache.config import settings


def configure_logging(level: str | None = None, json: bool | None = None) -> None:
    """Configure structlog for console or JSON output.

    Args:
        level: Log level name. Defaults to settings.log_level.
        json: Render JSON lines instead of the console renderer.
              Defaults to settings.log_json.
    """
    level_name = (level or settings.log_level).upper()
    use_json = settings.log_json if json is None else json

    numeric_level = getattr(logging, level_name, logging.INFO)

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if use_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=True,
    )
