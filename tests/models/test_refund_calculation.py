from datetime import datetime, timedelta

import pytest

from fare_engine.core.exceptions import InvalidInputError, MissingScheduledTimeError
from fare_engine.refund import (
    REFUND_REASONS,
    STATUS_POLICIES,
    TripCancellationContext,
    calculate_refund,
)
from fare_engine.trip import TripStatus

pytestmark = pytest.mark.unit


class TestStatusPolicies:
    @pytest.mark.parametrize(
        "status, percentage, reason",
        [
            ("waiting", 100, "Driver not yet assigned"),
            ("assigned", 90, "Driver assigned but not en route"),
            ("arriving", 50, "Driver is on the way to pickup"),
            ("picked_up", 0, "Trip already in progress - no refund"),
            ("in_progress", 0, "Trip already in progress - no refund"),
            ("completed", 100, "Default refund policy"),
            ("cancelled", 100, "Default refund policy"),
            ("other", 100, "Default refund policy"),
        ],
    )
    def test_policy_by_status(self, now, status, percentage, reason):
        refund = calculate_refund(status, 100, now=now)

        assert refund.refund_percentage == percentage
        assert refund.reason == reason
        assert refund.refund_amount == pytest.approx(percentage)
        assert refund.cancellation_fee == pytest.approx(100 - percentage)

    def test_waiting_refunds_everything(self, now):
        refund = calculate_refund("waiting", 100, None, now=now)

        assert refund.refund_percentage == 100
        assert refund.cancellation_fee == 0

    def test_arriving_splits_fare(self, now):
        refund = calculate_refund("arriving", 100, now=now)

        assert refund.refund_amount == 50
        assert refund.cancellation_fee == 50

    def test_picked_up_keeps_fare(self, now):
        refund = calculate_refund("picked_up", 100, now=now)

        assert refund.refund_amount == 0
        assert refund.cancellation_fee == 100

    def test_unrecognized_status_uses_default(self, now):
        refund = calculate_refund("teleporting", 80, now=now)

        assert refund.refund_percentage == 100
        assert refund.reason == "Default refund policy"

    def test_accepts_enum_status(self, now):
        refund = calculate_refund(TripStatus.ASSIGNED, 40, now=now)

        assert refund.refund_amount == pytest.approx(36.0)
        assert refund.cancellation_fee == pytest.approx(4.0)

    def test_scheduled_time_ignored_for_other_statuses(self, now):
        refund = calculate_refund("arriving", 100, now - timedelta(hours=5), now=now)

        assert refund.refund_percentage == 50

    def test_every_status_has_policy(self):
        assert set(STATUS_POLICIES) == set(TripStatus) - {TripStatus.SCHEDULED}


class TestScheduledTrips:
    @pytest.mark.parametrize(
        "minutes_ahead, percentage",
        [
            (90, 100),
            (61, 100),
            (60, 50),
            (45, 50),
            (31, 50),
            (30, 0),
            (10, 0),
            (0, 0),
            (-15, 0),
        ],
    )
    def test_lead_time_bands(self, now, minutes_ahead, percentage):
        scheduled = now + timedelta(minutes=minutes_ahead)

        refund = calculate_refund("scheduled", 100, scheduled, now=now)

        assert refund.refund_percentage == percentage

    def test_reasons(self, now):
        early = calculate_refund("scheduled", 100, now + timedelta(minutes=90), now=now)
        middle = calculate_refund("scheduled", 100, now + timedelta(minutes=45), now=now)
        late = calculate_refund("scheduled", 100, now + timedelta(minutes=10), now=now)

        assert early.reason == "Cancelled more than 1 hour before scheduled time"
        assert middle.reason == "Cancelled 30-60 minutes before scheduled time"
        assert late.reason == "Cancelled less than 30 minutes before scheduled time"

    def test_sub_minute_precision(self, now):
        scheduled = now + timedelta(minutes=60, seconds=1)

        refund = calculate_refund("scheduled", 100, scheduled, now=now)

        assert refund.refund_percentage == 100

    def test_missing_scheduled_time(self, now):
        with pytest.raises(MissingScheduledTimeError):
            calculate_refund("scheduled", 100, None, now=now)

    def test_mixed_naive_and_aware_times(self, now):
        naive = datetime(2025, 1, 15, 12, 0)

        with pytest.raises(InvalidInputError):
            calculate_refund("scheduled", 100, naive, now=now)

    def test_naive_times_allowed_together(self):
        now = datetime(2025, 1, 15, 10, 0)

        refund = calculate_refund("scheduled", 100, now + timedelta(hours=2), now=now)

        assert refund.refund_percentage == 100


class TestRefundCalculator:
    def test_calculate_from_context(self, refund_calculator, now):
        ctx = TripCancellationContext(trip_status=TripStatus.ARRIVING, fare=42.0, now=now)

        refund = refund_calculator.calculate_refund(ctx)

        assert refund.original_fare == 42.0
        assert refund.refund_amount == pytest.approx(21.0)

    def test_negative_fare_rejected(self, now):
        with pytest.raises(InvalidInputError):
            calculate_refund("waiting", -1, now=now)

    @pytest.mark.parametrize("fare", [0.0, 0.01, 33.33, 17.77, 1234.56, 99999.99])
    @pytest.mark.parametrize("status", ["waiting", "assigned", "arriving", "picked_up"])
    def test_fee_and_refund_sum_to_fare(self, now, status, fare):
        refund = calculate_refund(status, fare, now=now)

        assert refund.cancellation_fee + refund.refund_amount == pytest.approx(fare)
        assert refund.refund_amount == pytest.approx(fare * refund.refund_percentage / 100)
        assert refund.reason in REFUND_REASONS

    def test_deterministic(self, now):
        scheduled = now + timedelta(minutes=45)

        first = calculate_refund("scheduled", 57.5, scheduled, now=now)
        second = calculate_refund("scheduled", 57.5, scheduled, now=now)

        assert first == second

    def test_now_is_required(self):
        with pytest.raises(TypeError):
            calculate_refund("waiting", 100)
