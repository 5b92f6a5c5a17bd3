"""Structured logging configuration using structlog.

Logs go to stderr so that command output on stdout stays machine readable.
``LogConfig.format`` picks JSON lines (default) or structlog's console
renderer for interactive use.
"""

from __future__ import annotations

import logging
import sys

import structlog

from rbiam.models.config import LogConfig


def setup_logging(config: LogConfig | None = None) -> None:
    """Configure structlog from *config*; defaults to JSON at info level."""
    config = config or LogConfig()
    log_level = getattr(logging, config.level.upper(), logging.INFO)
    renderer = (
        structlog.dev.ConsoleRenderer(colors=False)
        if config.format == "console"
        else structlog.processors.JSONRenderer()
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso", utc=True, key="ts"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def get_logger(component: str) -> structlog.stdlib.BoundLogger:
    """Get a logger bound with a component name."""
    return structlog.get_logger(component=component)  # type: ignore[return-value]
