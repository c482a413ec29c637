"""Structured logging via structlog.

Call configure_logging() once at process start (the CLI does this from
settings). Loggers from get_logger() are lazy proxies, so loggers created
at import time pick up the configuration in force when they first log.

The validator and loader never log; logging belongs to the processes
that embed them (here, the CLI).
"""

import logging
import sys
from typing import Any

import structlog


def configure_logging(*, level: str = "WARNING", json_output: bool = False) -> None:
    """Configure structlog and the stdlib root logger.

    Args:
        level: Minimum log level name (DEBUG, INFO, WARNING, ERROR)
        json_output: Render events as JSON lines instead of console text
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level: {level}")

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=numeric_level,
        force=True,
    )

    renderer: Any
    if json_output:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None) -> Any:
    """Return a structlog logger, optionally bound to a component name."""
    if name is not None:
        return structlog.get_logger(component=name)
    return structlog.get_logger()
