"""Currency pricing profiles and display precision.

The pricing catalog is closed and versioned with the code. It is built
once at import and checked against the minor-unit table, so a currency
that can be priced can always be rounded for display.
"""

import logging
from collections.abc import Iterator, Mapping
from decimal import ROUND_HALF_UP, Decimal, localcontext

from pydantic import BaseModel, ConfigDict, Field

from .core.exceptions import ConfigurationError, UnsupportedCurrencyError
from .core.validation import require_finite

logger = logging.getLogger(__name__)


class CurrencyPricingProfile(BaseModel):
    """Rates used to price a trip in one currency."""

    model_config = ConfigDict(frozen=True)

    code: str = Field(min_length=3, max_length=3)
    base: float = Field(ge=0)
    per_distance_unit: float = Field(ge=0, description="Rate per km")
    per_duration_unit: float = Field(ge=0, description="Rate per minute")
    minimum_fare: float = Field(ge=0)


# Decimal places used when displaying an amount. Wider than the pricing
# catalog: fares may be shown in currencies that cannot be priced.
MINOR_UNITS: dict[str, int] = {
    "USD": 2,
    "EUR": 2,
    "GBP": 2,
    "JPY": 0,
    "CNY": 2,
    "INR": 2,
    "KRW": 0,
    "BRL": 2,
    "MXN": 2,
    "AUD": 2,
    "CAD": 2,
    "CHF": 2,
    "SAR": 2,
    "AED": 2,
    "JOD": 3,
    "EGP": 2,
}

_PROFILES = (
    CurrencyPricingProfile(
        code="AED", base=10, per_distance_unit=2, per_duration_unit=0.5, minimum_fare=15
    ),
    CurrencyPricingProfile(
        code="SAR", base=12, per_distance_unit=2.5, per_duration_unit=0.6, minimum_fare=18
    ),
    CurrencyPricingProfile(
        code="EGP", base=25, per_distance_unit=5, per_duration_unit=1, minimum_fare=35
    ),
    CurrencyPricingProfile(
        code="USD", base=3, per_distance_unit=0.6, per_duration_unit=0.15, minimum_fare=5
    ),
    CurrencyPricingProfile(
        code="EUR", base=2.5, per_distance_unit=0.5, per_duration_unit=0.12, minimum_fare=4
    ),
    CurrencyPricingProfile(
        code="GBP", base=2, per_distance_unit=0.4, per_duration_unit=0.1, minimum_fare=3.5
    ),
)


def normalize_currency_code(code: str) -> str:
    if not isinstance(code, str):
        raise UnsupportedCurrencyError(
            "Currency code must be a string", details={"currency": code}
        )
    return code.strip().upper()


class PricingCatalog:
    """Registry of pricing profiles keyed by ISO currency code."""

    def __init__(
        self,
        profiles: Mapping[str, CurrencyPricingProfile],
        minor_units: Mapping[str, int] | None = None,
    ) -> None:
        self._profiles = dict(profiles)
        self._minor_units = dict(MINOR_UNITS if minor_units is None else minor_units)
        self._validate()

    @classmethod
    def default(cls) -> "PricingCatalog":
        return cls({profile.code: profile for profile in _PROFILES})

    def _validate(self) -> None:
        if not self._profiles:
            raise ConfigurationError("Pricing catalog has no currencies")

        for code, profile in self._profiles.items():
            if code != profile.code:
                raise ConfigurationError(
                    f"Catalog key {code} does not match profile code {profile.code}",
                    details={"key": code, "profile_code": profile.code},
                )

        missing = sorted(set(self._profiles) - set(self._minor_units))
        if missing:
            raise ConfigurationError(
                f"No display precision for priced currencies: {', '.join(missing)}",
                details={"missing": missing},
            )

    def lookup(self, currency_code: str) -> CurrencyPricingProfile:
        code = normalize_currency_code(currency_code)
        try:
            return self._profiles[code]
        except KeyError:
            logger.warning(
                f"Unsupported currency requested: {currency_code!r}",
                extra={"currency": code},
            )
            raise UnsupportedCurrencyError(
                f"Unsupported currency: {currency_code}",
                details={
                    "currency": currency_code,
                    "supported": self.supported_currencies(),
                },
            ) from None

    def minor_units(self, currency_code: str) -> int:
        code = normalize_currency_code(currency_code)
        if code not in self._minor_units:
            raise UnsupportedCurrencyError(
                f"Unknown display precision for currency: {currency_code}",
                details={"currency": currency_code},
            )
        return self._minor_units[code]

    def supported_currencies(self) -> list[str]:
        return sorted(self._profiles)

    def __contains__(self, currency_code: object) -> bool:
        return isinstance(currency_code, str) and (
            normalize_currency_code(currency_code) in self._profiles
        )

    def __iter__(self) -> Iterator[CurrencyPricingProfile]:
        return iter(self._profiles.values())

    def __len__(self) -> int:
        return len(self._profiles)


DEFAULT_CATALOG = PricingCatalog.default()


def lookup_currency_profile(currency_code: str) -> CurrencyPricingProfile:
    """Return the pricing profile for a supported currency."""
    return DEFAULT_CATALOG.lookup(currency_code)


def minor_units(currency_code: str) -> int:
    """Number of decimal places an amount in this currency is displayed with."""
    return DEFAULT_CATALOG.minor_units(currency_code)


def round_amount(amount: float, currency_code: str) -> float:
    """Round an amount half-up to the currency's display precision.

    Goes through ``Decimal(str(amount))`` so that values such as 1.005
    round the way they read rather than the way they are stored.
    """
    amount = require_finite("amount", amount)
    places = minor_units(currency_code)
    value = Decimal(str(amount))
    quantum = Decimal(1).scaleb(-places)
    with localcontext() as ctx:
        # Enough digits for every integer digit plus the minor units
        ctx.prec = max(ctx.prec, value.adjusted() + places + 2)
        return float(value.quantize(quantum, rounding=ROUND_HALF_UP))
