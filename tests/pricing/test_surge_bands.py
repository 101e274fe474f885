import math

import pytest

from fare_engine.core.exceptions import InvalidInputError
from fare_engine.surge import MAX_SURGE_MULTIPLIER, SurgeEstimator, get_surge_multiplier

pytestmark = pytest.mark.unit


class TestSurgeEstimator:
    def test_balanced_zone(self, surge_estimator):
        assert surge_estimator.get_multiplier(10, 10) == 1.0

    def test_no_demand(self, surge_estimator):
        assert surge_estimator.get_multiplier(0, 10) == 1.0

    @pytest.mark.parametrize(
        "demand, supply, expected",
        [
            (11, 10, 1.0),
            (12, 10, 1.2),
            (14, 10, 1.2),
            (15, 10, 1.5),
            (19, 10, 1.5),
            (20, 10, 2.0),
            (30, 10, 2.0),
        ],
    )
    def test_band_boundaries(self, surge_estimator, demand, supply, expected):
        assert surge_estimator.get_multiplier(demand, supply) == expected

    def test_ratio_of_exactly_two_is_top_band(self, surge_estimator):
        assert surge_estimator.get_multiplier(20, 10) == 2.0

    @pytest.mark.parametrize("demand", [0, 1, 500])
    def test_zero_supply_is_max_surge(self, surge_estimator, demand):
        assert surge_estimator.get_multiplier(demand, 0) == MAX_SURGE_MULTIPLIER

    def test_fractional_counts(self, surge_estimator):
        assert surge_estimator.get_multiplier(2.5, 2) == 1.2

    @pytest.mark.parametrize("demand, supply", [(-1, 10), (10, -1), (math.nan, 1), (1, math.inf)])
    def test_invalid_inputs(self, surge_estimator, demand, supply):
        with pytest.raises(InvalidInputError):
            surge_estimator.get_multiplier(demand, supply)

    def test_never_below_one(self, surge_estimator):
        for demand in range(0, 50):
            assert surge_estimator.get_multiplier(demand, 7) >= 1.0

    def test_custom_bands(self):
        estimator = SurgeEstimator(bands=((1.0, 1.0),), max_multiplier=3.0)

        assert estimator.get_multiplier(5, 10) == 1.0
        assert estimator.get_multiplier(10, 10) == 3.0


def test_get_surge_multiplier_function():
    assert get_surge_multiplier(10, 10) == 1.0
    assert get_surge_multiplier(20, 10) == 2.0
    assert get_surge_multiplier(3, 0) == 2.0
