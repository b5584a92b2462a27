"""
Structured logging — structlog configured on top of the stdlib logging tree.

Usage:
    from ingest.core.logging import get_logger, setup_logging

    setup_logging()                   # call once at startup; INGEST_LOG_LEVEL
    logger = get_logger(__name__)
    logger.info("Parse finished", results=3, failed=1)
"""

from __future__ import annotations

import logging
import sys

import structlog

from ingest.core.config import settings


def setup_logging(level: str | None = None, json_output: bool | None = None) -> None:
    """
    Configure structlog and the root stdlib logger.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR).
               Defaults to settings.LOG_LEVEL.
        json_output: Render JSON lines instead of the colored dev console.
                     Defaults to settings.LOG_JSON.
    """
    level = level or settings.LOG_LEVEL
    if json_output is None:
        json_output = settings.LOG_JSON

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if json_output:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())

    structlog.configure(
        processors=shared_processors + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(structlog.stdlib.ProcessorFormatter(
        processor=renderer,
        foreign_pre_chain=shared_processors,
    ))

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger bound to `name`."""
    return structlog.get_logger(name)
