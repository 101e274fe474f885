"""Promotional discounts applied on top of a quoted fare."""

import logging
import math
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from .core.exceptions import InvalidPromoValueError
from .fare import FareCalculation

logger = logging.getLogger(__name__)


class PercentagePromo(BaseModel):
    """Discount of ``value`` percent of the fare total."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["percentage"] = "percentage"
    value: float


class FixedPromo(BaseModel):
    """Discount of ``value`` currency units."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["fixed"] = "fixed"
    value: float


PromoCode = Annotated[PercentagePromo | FixedPromo, Field(discriminator="kind")]

_promo_adapter: TypeAdapter[PercentagePromo | FixedPromo] = TypeAdapter(PromoCode)


def parse_promo(
    promo: PercentagePromo | FixedPromo | dict[str, Any],
) -> PercentagePromo | FixedPromo:
    """Accept a promo model or a ``{"kind": ..., "value": ...}`` mapping."""
    if isinstance(promo, PercentagePromo | FixedPromo):
        return promo
    try:
        return _promo_adapter.validate_python(promo)
    except PydanticValidationError as e:
        raise InvalidPromoValueError(
            "Malformed promo code", details={"promo": promo, "errors": e.errors()}
        ) from e


class PromoEngine:
    """Applies percentage or fixed discounts to a fare."""

    def validate(self, promo: PercentagePromo | FixedPromo) -> None:
        if not math.isfinite(promo.value) or promo.value < 0:
            raise InvalidPromoValueError(
                f"Promo value must be a non-negative number, got {promo.value}",
                details={"kind": promo.kind, "value": promo.value},
            )
        if promo.kind == "percentage" and promo.value > 100:
            raise InvalidPromoValueError(
                f"Percentage promo cannot exceed 100, got {promo.value}",
                details={"kind": promo.kind, "value": promo.value},
            )

    def apply_promo_code(
        self,
        fare: FareCalculation,
        promo: PercentagePromo | FixedPromo | dict[str, Any],
    ) -> FareCalculation:
        """Return a copy of ``fare`` with the discount and new total set.

        The recorded discount is the promo's face value even when it
        exceeds the fare; only the total is floored at zero.
        """
        promo = parse_promo(promo)
        try:
            self.validate(promo)
        except InvalidPromoValueError as e:
            logger.warning(
                f"Rejected promo: {e.message}", extra={"currency": fare.currency}
            )
            raise

        if promo.kind == "percentage":
            discount = fare.total * promo.value / 100
        else:
            discount = promo.value

        total = max(fare.total - discount, 0.0)
        logger.debug(
            f"Applied {promo.kind} promo {promo.value}: discount {discount:.2f}, "
            f"total {total:.2f} {fare.currency}",
            extra={"currency": fare.currency},
        )
        return fare.model_copy(update={"discount": discount, "total": total})


DEFAULT_PROMO_ENGINE = PromoEngine()


def apply_promo_code(
    fare: FareCalculation, promo: PercentagePromo | FixedPromo | dict[str, Any]
) -> FareCalculation:
    """Discount a fare with a percentage or fixed promo code."""
    return DEFAULT_PROMO_ENGINE.apply_promo_code(fare, promo)
