"""Structured logging setup using structlog."""

from __future__ import annotations

import logging
import sys

import structlog
from structlog.typing import FilteringBoundLogger

from treefs.infrastructure.config import LOG_LEVEL


def setup_logging(level: str = LOG_LEVEL) -> FilteringBoundLogger:
    """Build the package logger with console output on stderr.

    The logger is wrapped locally rather than through structlog.configure()
    so the host application's logging setup is left alone.
    """
    return structlog.wrap_logger(
        structlog.PrintLogger(file=sys.stderr),
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, level, logging.WARNING)),
        context_class=dict,
        cache_logger_on_first_use=True,
    ).bind(logger="treefs")


logger: FilteringBoundLogger = setup_logging()
