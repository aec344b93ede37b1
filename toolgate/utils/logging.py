"""Structured logging setup."""

import logging
import sys

import structlog
from structlog.typing import FilteringBoundLogger


def setup_logging(log_level: str = "INFO", log_format: str = "json") -> FilteringBoundLogger:
    """Configure structlog for the whole process.

    Logs are written to stderr so that stdout stays free for tool output.

    Args:
        log_level: Minimum level name (DEBUG, INFO, ...)
        log_format: "json" for machine-readable lines, "console" for humans

    Returns:
        Logger bound to the toolgate namespace
    """
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    renderer = (
        structlog.processors.JSONRenderer()
        if log_format == "json"
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )

    return structlog.get_logger("toolgate")
