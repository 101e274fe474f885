"""Standardized exception hierarchy for the fare engine.

All errors are permanent and none are retried. Callers surface the
message to the rider.
"""

from typing import Any


class FareEngineError(Exception):
    """Base exception for all fare engine errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(FareEngineError):
    """Invalid input or data format."""

    pass


class InvalidInputError(ValidationError):
    """Negative, non-finite or otherwise malformed numeric input."""

    pass


class InvalidPromoValueError(ValidationError):
    """Promo value is negative or a percentage above 100."""

    pass


class MissingScheduledTimeError(ValidationError):
    """Scheduled trip refund requested without a scheduled time."""

    pass


class NotFoundError(FareEngineError):
    """Requested entity does not exist."""

    pass


class UnsupportedCurrencyError(NotFoundError):
    """Currency code has no pricing profile."""

    pass


class ConfigurationError(FareEngineError):
    """Missing or invalid configuration."""

    pass
