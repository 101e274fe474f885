"""Fare pricing, promo discounts and cancellation refunds for ride bookings."""

from .core.exceptions import (
    ConfigurationError,
    FareEngineError,
    InvalidInputError,
    InvalidPromoValueError,
    MissingScheduledTimeError,
    NotFoundError,
    UnsupportedCurrencyError,
    ValidationError,
)
from .currency import (
    CurrencyPricingProfile,
    PricingCatalog,
    lookup_currency_profile,
    minor_units,
    round_amount,
)
from .fare import FareCalculation, FareCalculator, calculate_fare
from .payout import FareSplit, PayoutCalculator, split_fare
from .promo import FixedPromo, PercentagePromo, PromoCode, PromoEngine, apply_promo_code
from .refund import (
    RefundCalculation,
    RefundCalculator,
    TripCancellationContext,
    calculate_refund,
)
from .surge import SurgeEstimator, get_surge_multiplier
from .trip import TripStatus

__all__ = [
    "lookup_currency_profile",
    "get_surge_multiplier",
    "calculate_fare",
    "apply_promo_code",
    "calculate_refund",
    "split_fare",
    "round_amount",
    "minor_units",
    "CurrencyPricingProfile",
    "PricingCatalog",
    "SurgeEstimator",
    "FareCalculation",
    "FareCalculator",
    "PercentagePromo",
    "FixedPromo",
    "PromoCode",
    "PromoEngine",
    "TripStatus",
    "TripCancellationContext",
    "RefundCalculation",
    "RefundCalculator",
    "FareSplit",
    "PayoutCalculator",
    "FareEngineError",
    "ValidationError",
    "InvalidInputError",
    "InvalidPromoValueError",
    "MissingScheduledTimeError",
    "NotFoundError",
    "UnsupportedCurrencyError",
    "ConfigurationError",
]
