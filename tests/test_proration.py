"""Prorated usage across calendar months"""
from datetime import date, timedelta
from decimal import Decimal

import pytest

from hostel_billing.core.exceptions import InvalidDateRangeError, ValidationError
from hostel_billing.services.fee_structure.proration_service import ProrationService
from hostel_billing.utils.date_utils import inclusive_days


@pytest.fixture
def proration():
    return ProrationService()


class TestFullMonth:

    def test_leap_february_full_month(self, proration):
        """Feb 2024 has 29 days: the full fee is charged"""
        segments = proration.compute_usage(date(2024, 2, 1), date(2024, 2, 29), Decimal("15000"))
        assert len(segments) == 1
        seg = segments[0]
        assert seg.month == "2024-02"
        assert seg.month_name == "February 2024"
        assert seg.days_in_month == 29
        assert seg.days_used == 29
        assert seg.daily_rate == Decimal("517.2414")
        assert seg.amount == Decimal("15000.00")

    def test_non_leap_february(self, proration):
        seg = proration.compute_usage(date(2023, 2, 1), date(2023, 2, 28), Decimal("14000"))[0]
        assert seg.days_in_month == 28
        assert seg.amount == Decimal("14000.00")


class TestMultiMonth:

    def test_partial_first_and_last_month(self, proration):
        segments = proration.compute_usage(date(2024, 1, 15), date(2024, 3, 10), Decimal("15000"))

        assert [s.month for s in segments] == ["2024-01", "2024-02", "2024-03"]
        assert [s.days_used for s in segments] == [17, 29, 10]
        assert [s.amount for s in segments] == [
            Decimal("8225.81"),
            Decimal("15000.00"),
            Decimal("4838.71"),
        ]
        assert proration.total_amount(segments) == Decimal("28064.52")
        assert proration.total_days(segments) == 56

    def test_segment_periods(self, proration):
        segments = proration.compute_usage(date(2024, 1, 15), date(2024, 3, 10), Decimal("15000"))
        assert segments[0].period_start == date(2024, 1, 15)
        assert segments[0].period_end == date(2024, 1, 31)
        assert segments[1].period_start == date(2024, 2, 1)
        assert segments[1].period_end == date(2024, 2, 29)
        assert segments[2].period == "2024-03-01 to 2024-03-10"

    def test_year_boundary(self, proration):
        segments = proration.compute_usage(date(2023, 12, 20), date(2024, 1, 5), Decimal("3100"))
        assert [s.month for s in segments] == ["2023-12", "2024-01"]
        assert [s.days_used for s in segments] == [12, 5]
        assert segments[0].amount == Decimal("1200.00")
        assert segments[1].amount == Decimal("500.00")

    def test_days_cover_the_stay_exactly(self, proration):
        start, end = date(2023, 11, 7), date(2024, 4, 22)
        segments = proration.compute_usage(start, end, Decimal("9999.99"))
        assert proration.total_days(segments) == inclusive_days(start, end)
        # Contiguous, non-overlapping
        for prev, nxt in zip(segments, segments[1:]):
            assert nxt.period_start == prev.period_end + timedelta(days=1)


class TestEdgeCases:

    def test_single_day_stay(self, proration):
        segments = proration.compute_usage(date(2024, 4, 10), date(2024, 4, 10), Decimal("3000"))
        assert len(segments) == 1
        assert segments[0].days_used == 1
        assert segments[0].amount == Decimal("100.00")

    def test_end_before_start_rejected(self, proration):
        with pytest.raises(InvalidDateRangeError) as exc:
            proration.compute_usage(date(2024, 3, 10), date(2024, 3, 9), Decimal("15000"))
        assert exc.value.details["start_date"] == "2024-03-10"

    def test_negative_fee_rejected(self, proration):
        with pytest.raises(ValidationError):
            proration.compute_usage(date(2024, 1, 1), date(2024, 1, 31), Decimal("-1"))

    def test_zero_fee_gives_zero_amounts(self, proration):
        segments = proration.compute_usage(date(2024, 1, 1), date(2024, 1, 31), Decimal("0"))
        assert segments[0].amount == Decimal("0.00")

    def test_pure(self, proration):
        args = (date(2024, 1, 15), date(2024, 3, 10), Decimal("15000"))
        assert proration.compute_usage(*args) == proration.compute_usage(*args)
