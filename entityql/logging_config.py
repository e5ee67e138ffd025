"""Structured logging for entityQL, built on structlog.

The library never configures logging on import; applications call
:func:`configure_logging` once (or configure structlog themselves) and modules
obtain loggers through :func:`get_logger`::

    from entityql.logging_config import configure_logging, get_logger

    configure_logging()  # level from ENTITYQL_LOG_LEVEL
    logger = get_logger(__name__)
    logger.debug("query_compiled", operation="select", table="Orders")

Only metadata is logged (operation, table, dialect, counts); bound parameter
values never reach a log record.
"""
from __future__ import annotations

import logging
import sys

import structlog
from structlog.types import Processor

from entityql.settings import get_settings


def _shared_processors() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]


def configure_logging(level: str | int | None = None, json: bool = False) -> None:
    """Configure structlog on top of the stdlib ``logging`` module.

    Args:
        level: Log level name or number (e.g. ``"DEBUG"``).  Defaults to
            ``AdapterSettings.log_level`` (``ENTITYQL_LOG_LEVEL``).
        json: Render JSON lines instead of the human-readable console format.
    """
    if level is None:
        level = get_settings().log_level
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)
    logging.getLogger("entityql").setLevel(level)

    renderer: Processor = (
        structlog.processors.JSONRenderer()
        if json
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *_shared_processors(),
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger bound to ``name``."""
    return structlog.get_logger(name)
