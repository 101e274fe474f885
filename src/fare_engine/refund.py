"""Cancellation refund policy.

How much of a fare goes back to the rider depends on how far the trip
had progressed when it was cancelled. Scheduled trips are judged by
lead time instead: the earlier the cancellation, the larger the refund.

The current time is always passed in by the caller. Nothing here reads
the system clock.
"""

import logging
from datetime import datetime
from typing import NamedTuple

from pydantic import BaseModel, ConfigDict, Field

from .core.exceptions import (
    ConfigurationError,
    InvalidInputError,
    MissingScheduledTimeError,
)
from .core.validation import require_non_negative
from .fare_logging import log_trip_context
from .trip import TripStatus

logger = logging.getLogger(__name__)


class RefundPolicy(NamedTuple):
    refund_percentage: int
    reason: str


SCHEDULED_FULL_REFUND = RefundPolicy(
    100, "Cancelled more than 1 hour before scheduled time"
)
SCHEDULED_PARTIAL_REFUND = RefundPolicy(
    50, "Cancelled 30-60 minutes before scheduled time"
)
SCHEDULED_NO_REFUND = RefundPolicy(
    0, "Cancelled less than 30 minutes before scheduled time"
)

# Lead-time thresholds in minutes, strictly greater than
FULL_REFUND_LEAD_MINUTES = 60
PARTIAL_REFUND_LEAD_MINUTES = 30

DEFAULT_POLICY = RefundPolicy(100, "Default refund policy")
IN_PROGRESS_POLICY = RefundPolicy(0, "Trip already in progress - no refund")

STATUS_POLICIES: dict[TripStatus, RefundPolicy] = {
    TripStatus.WAITING: RefundPolicy(100, "Driver not yet assigned"),
    TripStatus.ASSIGNED: RefundPolicy(90, "Driver assigned but not en route"),
    TripStatus.ARRIVING: RefundPolicy(50, "Driver is on the way to pickup"),
    TripStatus.PICKED_UP: IN_PROGRESS_POLICY,
    TripStatus.IN_PROGRESS: IN_PROGRESS_POLICY,
    TripStatus.COMPLETED: DEFAULT_POLICY,
    TripStatus.CANCELLED: DEFAULT_POLICY,
    TripStatus.OTHER: DEFAULT_POLICY,
}

REFUND_REASONS: frozenset[str] = frozenset(
    policy.reason
    for policy in (
        SCHEDULED_FULL_REFUND,
        SCHEDULED_PARTIAL_REFUND,
        SCHEDULED_NO_REFUND,
        *STATUS_POLICIES.values(),
    )
)


def _check_policy_coverage() -> None:
    uncovered = set(TripStatus) - {TripStatus.SCHEDULED} - set(STATUS_POLICIES)
    if uncovered:
        raise ConfigurationError(
            "Refund policy missing for trip statuses: "
            + ", ".join(sorted(status.value for status in uncovered)),
            details={"uncovered": sorted(status.value for status in uncovered)},
        )


_check_policy_coverage()


class TripCancellationContext(BaseModel):
    """Everything the refund policy needs to know about a cancelled trip."""

    model_config = ConfigDict(frozen=True)

    trip_status: TripStatus
    fare: float = Field(ge=0)
    scheduled_time: datetime | None = None
    now: datetime


class RefundCalculation(BaseModel):
    """Outcome of a cancellation."""

    model_config = ConfigDict(frozen=True)

    original_fare: float = Field(ge=0)
    cancellation_fee: float = Field(ge=0)
    refund_amount: float = Field(ge=0)
    refund_percentage: int = Field(ge=0, le=100)
    reason: str


def minutes_until(scheduled_time: datetime, now: datetime) -> float:
    try:
        delta = scheduled_time - now
    except TypeError as e:
        raise InvalidInputError(
            "scheduled_time and now must both be timezone-aware or both naive",
            details={
                "scheduled_time": scheduled_time.isoformat(),
                "now": now.isoformat(),
            },
        ) from e
    return delta.total_seconds() / 60


class RefundCalculator:
    """Computes refunds from the trip's stage at cancellation time."""

    def scheduled_policy(self, minutes_until_trip: float) -> RefundPolicy:
        if minutes_until_trip > FULL_REFUND_LEAD_MINUTES:
            return SCHEDULED_FULL_REFUND
        if minutes_until_trip > PARTIAL_REFUND_LEAD_MINUTES:
            return SCHEDULED_PARTIAL_REFUND
        return SCHEDULED_NO_REFUND

    def policy_for(self, ctx: TripCancellationContext) -> RefundPolicy:
        if ctx.trip_status == TripStatus.SCHEDULED:
            if ctx.scheduled_time is None:
                logger.warning(
                    "Refund requested for scheduled trip without a time",
                    extra={"trip_status": ctx.trip_status.value},
                )
                raise MissingScheduledTimeError(
                    "Scheduled trip refund requires a scheduled time",
                    details={"trip_status": ctx.trip_status.value},
                )
            return self.scheduled_policy(minutes_until(ctx.scheduled_time, ctx.now))
        return STATUS_POLICIES[ctx.trip_status]

    def calculate_refund(self, ctx: TripCancellationContext) -> RefundCalculation:
        policy = self.policy_for(ctx)

        refund_amount = ctx.fare * policy.refund_percentage / 100
        cancellation_fee = ctx.fare - refund_amount

        logger.debug(
            f"Refund {policy.refund_percentage}% of {ctx.fare} for "
            f"{ctx.trip_status.value} trip: {policy.reason}",
            extra={"trip_status": ctx.trip_status.value},
        )

        return RefundCalculation(
            original_fare=ctx.fare,
            cancellation_fee=cancellation_fee,
            refund_amount=refund_amount,
            refund_percentage=policy.refund_percentage,
            reason=policy.reason,
        )


DEFAULT_REFUND_CALCULATOR = RefundCalculator()


def calculate_refund(
    trip_status: str | TripStatus,
    fare: float,
    scheduled_time: datetime | None = None,
    *,
    now: datetime,
    trip_id: str | None = None,
) -> RefundCalculation:
    """Refund owed to a rider who cancels now.

    Unrecognized statuses fall under the default policy. When ``trip_id``
    is given, every record logged during the calculation carries it.
    """
    if trip_id is None:
        return _calculate_refund(trip_status, fare, scheduled_time, now)
    with log_trip_context(trip_id):
        return _calculate_refund(trip_status, fare, scheduled_time, now)


def _calculate_refund(
    trip_status: str | TripStatus,
    fare: float,
    scheduled_time: datetime | None,
    now: datetime,
) -> RefundCalculation:
    ctx = TripCancellationContext(
        trip_status=TripStatus.parse(trip_status),
        fare=require_non_negative("fare", fare),
        scheduled_time=scheduled_time,
        now=now,
    )
    return DEFAULT_REFUND_CALCULATOR.calculate_refund(ctx)
