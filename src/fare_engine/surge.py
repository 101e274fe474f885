"""Demand-driven surge bands."""

import logging
import math

from .core.validation import require_non_negative

logger = logging.getLogger(__name__)

# (exclusive upper bound on demand/supply ratio, multiplier), checked in order.
SURGE_BANDS: tuple[tuple[float, float], ...] = (
    (1.2, 1.0),
    (1.5, 1.2),
    (2.0, 1.5),
)
MAX_SURGE_MULTIPLIER = 2.0


class SurgeEstimator:
    """Maps a zone's demand/supply ratio onto a discrete surge multiplier.

    Pricing moves in coarse steps rather than continuously. A zone with
    no available drivers is priced at the top band.
    """

    def __init__(
        self,
        bands: tuple[tuple[float, float], ...] = SURGE_BANDS,
        max_multiplier: float = MAX_SURGE_MULTIPLIER,
    ) -> None:
        self.bands = bands
        self.max_multiplier = max_multiplier

    def get_multiplier(self, demand: float, supply: float) -> float:
        demand = require_non_negative("demand", demand)
        supply = require_non_negative("supply", supply)

        ratio = demand / supply if supply > 0 else math.inf
        for upper_bound, multiplier in self.bands:
            if ratio < upper_bound:
                return multiplier

        logger.debug(
            f"Max surge {self.max_multiplier} for demand={demand} supply={supply}"
        )
        return self.max_multiplier


DEFAULT_ESTIMATOR = SurgeEstimator()


def get_surge_multiplier(demand: float, supply: float) -> float:
    """Surge multiplier for open requests versus available drivers."""
    return DEFAULT_ESTIMATOR.get_multiplier(demand, supply)
