"""
Structured logging for recordflow.

Log lines are written to stderr so that command results printed on stdout
stay machine-readable.
"""

import logging
import sys
from contextlib import AbstractContextManager
from typing import Any

import structlog
from structlog.types import FilteringBoundLogger, Processor


def _stderr_logger(*args: Any) -> structlog.PrintLogger:
    # Resolved per logger so a redirected stderr is honored
    return structlog.PrintLogger(sys.stderr)


def _level_number(level: str) -> int:
    return logging.getLevelNamesMapping().get(level.upper(), logging.INFO)


def _renderers(json_output: bool) -> list[Processor]:
    if json_output:
        return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    return [structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())]


def configure_logging(level: str = "INFO", json_output: bool = False) -> None:
    """
    Route structlog output to stderr.

    Args:
        level: Minimum level name; unknown names fall back to INFO.
        json_output: Emit one JSON object per line instead of console text.
    """
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        *_renderers(json_output),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(_level_number(level)),
        context_class=dict,
        logger_factory=_stderr_logger,
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None) -> FilteringBoundLogger:
    """Logger for a module, usually called with ``__name__``."""
    return structlog.get_logger(name)


def log_context(**kwargs: Any) -> AbstractContextManager[None]:
    """
    Bind key/value pairs to every log line emitted inside the block.

    Example:
        with log_context(resource="data.csv", format="CSV"):
            log.info("Parsing records")  # carries resource and format
    """
    return structlog.contextvars.bound_contextvars(**kwargs)
