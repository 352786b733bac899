"""
Structured logging for featurekit, built on structlog.

Library modules only call :func:`get_logger`; they never configure structlog.
An application that has not configured structlog sees structlog's defaults, which
print every event including the loader's debug traces (``feature_dequeued``,
``duplicate_skipped``). Call :func:`configure_logging` at startup to pick a level
and a renderer.
"""

import logging
from typing import IO, Any, Optional

import structlog

__all__ = ["configure_logging", "get_logger", "log_context"]


def configure_logging(
    level: str = "INFO",
    json_output: bool = False,
    stream: Optional[IO[str]] = None,
    cache_loggers: bool = True,
) -> None:
    """
    Configure structlog for an application loading features.

    Args:
        level: Minimum level name (DEBUG, INFO, WARNING, ERROR, CRITICAL); unknown
            names fall back to INFO.
        json_output: Render one JSON object per line instead of console text.
        stream: Where log lines are written; defaults to stdout.
        cache_loggers: Freeze each logger's configuration on first use. Turn this
            off when the configuration is changed again later, as in tests.
    """
    log_level = logging.getLevelName(level.upper())
    if not isinstance(log_level, int):
        log_level = logging.INFO

    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if json_output:
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        cache_logger_on_first_use=cache_loggers,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a logger, typically with ``__name__`` as its name."""
    return structlog.get_logger(name)


def log_context(**kwargs: Any) -> structlog.contextvars.bound_contextvars:
    """
    Bind values to every event logged inside the block.

    Example:
        with log_context(application="billing"):
            loader.load(*features)  # features_loaded carries application="billing"
    """
    return structlog.contextvars.bound_contextvars(**kwargs)
