"""Numeric guards shared by the calculators."""

import math

from .exceptions import InvalidInputError


def require_finite(name: str, value: float) -> float:
    """Reject NaN, infinities and non-numeric values."""
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise InvalidInputError(
            f"{name} must be a number", details={"field": name, "value": value}
        )
    if not math.isfinite(value):
        raise InvalidInputError(
            f"{name} must be finite", details={"field": name, "value": value}
        )
    return float(value)


def require_non_negative(name: str, value: float) -> float:
    value = require_finite(name, value)
    if value < 0:
        raise InvalidInputError(
            f"{name} must be non-negative", details={"field": name, "value": value}
        )
    return value
