"""Logging module with structured formatters and context management."""

from .context import ContextFilter, LogContext, log_context, log_trip_context
from .filters import DefaultCorrelationFilter
from .formatters import DevFormatter, JSONFormatter
from .setup import configure_logging, get_logger, setup_logging

__all__ = [
    "setup_logging",
    "configure_logging",
    "get_logger",
    "log_context",
    "log_trip_context",
    "JSONFormatter",
    "DevFormatter",
    "DefaultCorrelationFilter",
    "LogContext",
    "ContextFilter",
]
