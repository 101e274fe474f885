"""Logging setup and configuration."""

import logging
import sys

from ..settings import LoggingSettings
from .context import ContextFilter
from .filters import DefaultCorrelationFilter
from .formatters import DevFormatter, JSONFormatter


def setup_logging(
    level: str = "INFO",
    json_output: bool = False,
    environment: str = "development",
) -> None:
    """Configure the root logger with appropriate formatter and filters."""
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)

    if json_output:
        handler.setFormatter(JSONFormatter(environment))
    else:
        handler.setFormatter(DevFormatter())

    # Context first, so a trip correlation_id wins over the default
    handler.addFilter(ContextFilter())
    handler.addFilter(DefaultCorrelationFilter())

    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, level.upper()))


def configure_logging(settings: LoggingSettings | None = None) -> None:
    """Apply LOG_* settings from the environment."""
    if settings is None:
        settings = LoggingSettings()

    setup_logging(
        level=settings.level,
        json_output=settings.format == "json",
        environment=settings.environment,
    )


def get_logger(name: str) -> logging.Logger:
    """Get a logger with the given name."""
    return logging.getLogger(name)
