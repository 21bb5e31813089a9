"""Utilities package for the station planner."""
from .logging_setup import PlanLogger, get_logger, setup_logging
from .structured_logging import (
    bind_context,
    bound_context,
    clear_context,
    configure_structlog,
    get_structured_logger,
    route_to_stdlib,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "PlanLogger",
    "configure_structlog",
    "route_to_stdlib",
    "get_structured_logger",
    "bind_context",
    "bound_context",
    "clear_context",
]
