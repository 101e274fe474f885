"""Trip fare pricing from distance, duration, currency and surge."""

import logging

from pydantic import BaseModel, ConfigDict, Field

from .core.validation import require_non_negative
from .currency import DEFAULT_CATALOG, PricingCatalog, round_amount
from .settings import PricingSettings

logger = logging.getLogger(__name__)


class FareCalculation(BaseModel):
    """Detailed breakdown of fare components."""

    model_config = ConfigDict(frozen=True)

    base_fare: float = Field(ge=0)
    distance_fare: float = Field(ge=0)
    time_fare: float = Field(ge=0)
    # Negative when an off-peak multiplier below 1.0 was applied
    surge_fare: float
    discount: float = Field(default=0.0, ge=0)
    total: float = Field(ge=0)
    currency: str

    @property
    def subtotal(self) -> float:
        """Sum of the components before the minimum fare floor."""
        return self.base_fare + self.distance_fare + self.time_fare + self.surge_fare

    def rounded(self) -> "FareCalculation":
        """Copy with every amount rounded to the currency's display precision."""
        return self.model_copy(
            update={
                field: round_amount(getattr(self, field), self.currency)
                for field in (
                    "base_fare",
                    "distance_fare",
                    "time_fare",
                    "surge_fare",
                    "discount",
                    "total",
                )
            }
        )


class FareCalculator:
    """Calculates ride fares based on distance, duration, currency and surge."""

    def __init__(self, catalog: PricingCatalog | None = None) -> None:
        self.catalog = catalog or DEFAULT_CATALOG

    def calculate_fare(
        self,
        distance_km: float,
        duration_min: float,
        currency_code: str,
        surge_multiplier: float = 1.0,
    ) -> FareCalculation:
        """
        Calculate fare for a trip.

        Surge scales base, distance and time together. The minimum fare
        is applied after surge, so a reduced off-peak fare never drops
        below the currency's floor. Amounts are not rounded here.
        """
        distance_km = require_non_negative("distance_km", distance_km)
        duration_min = require_non_negative("duration_min", duration_min)
        surge_multiplier = require_non_negative("surge_multiplier", surge_multiplier)

        profile = self.catalog.lookup(currency_code)

        base_fare = profile.base
        distance_fare = distance_km * profile.per_distance_unit
        time_fare = duration_min * profile.per_duration_unit

        subtotal = base_fare + distance_fare + time_fare
        surge_fare = subtotal * (surge_multiplier - 1)
        total = max(subtotal + surge_fare, profile.minimum_fare)

        logger.debug(
            f"Fare {total:.2f} {profile.code} for {distance_km}km/{duration_min}min "
            f"at surge {surge_multiplier}",
            extra={"currency": profile.code},
        )

        return FareCalculation(
            base_fare=base_fare,
            distance_fare=distance_fare,
            time_fare=time_fare,
            surge_fare=surge_fare,
            discount=0.0,
            total=total,
            currency=profile.code,
        )


DEFAULT_CALCULATOR = FareCalculator()


def calculate_fare(
    distance_km: float,
    duration_min: float,
    currency_code: str | None = None,
    surge_multiplier: float = 1.0,
) -> FareCalculation:
    """Price a trip. Without a currency, the configured default is used."""
    if currency_code is None:
        currency_code = PricingSettings().default_currency
    return DEFAULT_CALCULATOR.calculate_fare(
        distance_km, duration_min, currency_code, surge_multiplier
    )
