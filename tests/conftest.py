from datetime import UTC, datetime

import pytest

from fare_engine.fare import FareCalculator
from fare_engine.promo import PromoEngine
from fare_engine.refund import RefundCalculator
from fare_engine.surge import SurgeEstimator


@pytest.fixture(autouse=True)
def clean_pricing_env(monkeypatch):
    """Keep FARE_* and LOG_* overrides from the shell out of the tests."""
    for var in (
        "FARE_DEFAULT_CURRENCY",
        "FARE_PLATFORM_FEE_PERCENTAGE",
        "LOG_LEVEL",
        "LOG_FORMAT",
        "LOG_ENVIRONMENT",
    ):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def now() -> datetime:
    """Fixed cancellation instant for deterministic refund tests."""
    return datetime(2025, 1, 15, 10, 30, tzinfo=UTC)


@pytest.fixture
def fare_calculator() -> FareCalculator:
    return FareCalculator()


@pytest.fixture
def promo_engine() -> PromoEngine:
    return PromoEngine()


@pytest.fixture
def refund_calculator() -> RefundCalculator:
    return RefundCalculator()


@pytest.fixture
def surge_estimator() -> SurgeEstimator:
    return SurgeEstimator()
