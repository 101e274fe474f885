"""Platform fee and driver payout for a charged fare."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .core.exceptions import InvalidInputError
from .core.validation import require_finite, require_non_negative
from .settings import PricingSettings


class FareSplit(BaseModel):
    """Division of a charged fare between the platform and the driver."""

    model_config = ConfigDict(frozen=True)

    fare_amount: float = Field(ge=0)
    platform_fee_percentage: float = Field(default=20.0, ge=0, le=100)
    platform_fee_amount: float = 0.0
    driver_payout_amount: float = 0.0

    @model_validator(mode="before")
    @classmethod
    def calculate_breakdown(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        fare_amount = data.get("fare_amount")
        percentage = data.get("platform_fee_percentage", 20.0)
        # Malformed values are left for field validation to reject
        if not all(
            isinstance(v, int | float) and not isinstance(v, bool)
            for v in (fare_amount, percentage)
        ):
            return data
        platform_fee_amount = fare_amount * percentage / 100
        return {
            **data,
            "platform_fee_amount": platform_fee_amount,
            "driver_payout_amount": fare_amount - platform_fee_amount,
        }


class PayoutCalculator:
    def __init__(self, platform_fee_percentage: float | None = None) -> None:
        if platform_fee_percentage is None:
            platform_fee_percentage = PricingSettings().platform_fee_percentage
        self.platform_fee_percentage = self._check_percentage(platform_fee_percentage)

    @staticmethod
    def _check_percentage(value: float) -> float:
        value = require_finite("platform_fee_percentage", value)
        if not 0 <= value <= 100:
            raise InvalidInputError(
                f"Platform fee percentage must be between 0 and 100, got {value}",
                details={"field": "platform_fee_percentage", "value": value},
            )
        return value

    def split_fare(
        self, fare_amount: float, platform_fee_percentage: float | None = None
    ) -> FareSplit:
        percentage = (
            self.platform_fee_percentage
            if platform_fee_percentage is None
            else self._check_percentage(platform_fee_percentage)
        )
        return FareSplit(
            fare_amount=require_non_negative("fare_amount", fare_amount),
            platform_fee_percentage=percentage,
        )


def split_fare(
    fare_amount: float, platform_fee_percentage: float | None = None
) -> FareSplit:
    """Split a charged fare into platform fee and driver payout."""
    return PayoutCalculator().split_fare(fare_amount, platform_fee_percentage)
