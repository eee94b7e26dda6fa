"""
Logging: structlog setup for applications built on rop.

The library emits a single event, the HTTP adapter's http.unmapped_status
warning, and never configures logging on import. Applications call
configure_structlog() once at startup (or rely on their own structlog
configuration); until then structlog's defaults print to stdout.
"""

from __future__ import annotations

import logging

import structlog

from rop.config import get_settings


def configure_structlog(log_level: str | None = None) -> None:
    """
    Configure structlog for structured console logging.

    Falls back to the configured ROP_LOG_LEVEL when no level is given, and
    to INFO when the level name is unknown.
    """
    level_name = (log_level or get_settings().log_level).upper()
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, level_name, logging.INFO)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
