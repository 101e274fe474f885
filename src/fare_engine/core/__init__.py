"""Core utilities for the fare engine."""

from .exceptions import (
    ConfigurationError,
    FareEngineError,
    InvalidInputError,
    InvalidPromoValueError,
    MissingScheduledTimeError,
    NotFoundError,
    UnsupportedCurrencyError,
    ValidationError,
)
from .validation import require_finite, require_non_negative

__all__ = [
    "FareEngineError",
    "ValidationError",
    "InvalidInputError",
    "InvalidPromoValueError",
    "MissingScheduledTimeError",
    "NotFoundError",
    "UnsupportedCurrencyError",
    "ConfigurationError",
    "require_finite",
    "require_non_negative",
]
