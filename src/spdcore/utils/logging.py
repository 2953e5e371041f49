"""structlog configuration shared by the library and the CLI."""

from __future__ import annotations

import logging
import sys

import structlog
from structlog.typing import FilteringBoundLogger, Processor


def _stderr_logger(*args: object) -> structlog.PrintLogger:
    # Looked up per logger so a swapped sys.stderr (test runners) is honoured
    return structlog.PrintLogger(file=sys.stderr)


def setup_logging(level: str = "INFO", json_output: bool = False) -> None:
    """Configure structlog for console or JSON-lines output.

    Log lines always go to stderr; stdout is reserved for command output.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    renderer: Processor
    if json_output:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=_stderr_logger,
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None) -> FilteringBoundLogger:
    """Return a bound logger tagged with the calling module's name."""
    if name:
        # "logger" is wrap_logger's own parameter, so the name rides as logger_name
        return structlog.get_logger(name, logger_name=name)
    return structlog.get_logger()


# Library default until the application calls setup_logging(): warnings and
# above, on stderr.
if not structlog.is_configured():
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(logging.WARNING),
        logger_factory=_stderr_logger,
        cache_logger_on_first_use=False,
    )
