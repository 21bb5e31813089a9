"""
Structured Logging
==================
structlog integration for key/value event logs.

Until ``configure_structlog`` is called, events are rendered as key=value
text and handed to the stdlib logger of the same name, so the planner never
writes to stdout on its own.

Usage:
    from stationplan.utils.structured_logging import get_structured_logger

    log = get_structured_logger("stationplan.planner")
    log.info("pass_complete", pass_number=1, fairness=0.93)
"""
import logging
from typing import Any, ContextManager, Optional, TextIO

import structlog
import structlog.contextvars


def route_to_stdlib() -> None:
    """Send events through stdlib ``logging`` (the library default)."""
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.KeyValueRenderer(key_order=["event"]),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def configure_structlog(
    json_output: bool = False,
    level: int = logging.INFO,
    stream: Optional[TextIO] = None,
) -> None:
    """
    Configure structlog for the application.

    Args:
        json_output: If True, output JSON logs (for production).
                    If False, use colored console output (for development).
        level: Minimum level passed through the filtering logger.
        stream: Output stream (stdout when None). The CLI passes stderr so
                events never mix with its JSON summary.
    """
    if json_output:
        processors = [
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = [
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="%H:%M:%S"),
            structlog.dev.ConsoleRenderer(colors=stream is None),
        ]

    # Loggers are not cached: the stream may be swapped (test capture, CLI runs).
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        cache_logger_on_first_use=False,
    )


def get_structured_logger(name: str) -> Any:
    """
    Get a structured logger.

    Args:
        name: Logger name (e.g., "stationplan.planner")
    """
    return structlog.get_logger(name)


def bind_context(**kwargs) -> None:
    """
    Bind context variables for all subsequent log calls.

    Args:
        **kwargs: Context values (e.g., request="abc123")
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def bound_context(**kwargs) -> ContextManager[None]:
    """Bind context variables for the enclosed block only, restoring the previous values after."""
    return structlog.contextvars.bound_contextvars(**kwargs)


def clear_context() -> None:
    """Clear all context variables."""
    structlog.contextvars.clear_contextvars()


if not structlog.is_configured():
    route_to_stdlib()
