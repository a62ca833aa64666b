"""
Proration Service

Calculates prorated usage charges for a stay that spans partial calendar
months:
- Late check-ins (stay starts mid-month)
- Early check-outs (stay ends mid-month)
- Multi-month stays with full months in between

Each calendar month is charged at monthly_fee / days_in_month per day used,
using the actual number of days in that month.
"""

from datetime import date
from decimal import Decimal
from typing import List

from hostel_billing.core.exceptions import InvalidDateRangeError, ValidationError
from hostel_billing.core.logging import get_logger
from hostel_billing.schemas.billing.usage import UsageCalculation
from hostel_billing.utils.date_utils import (
    days_in_month,
    inclusive_days,
    iter_months,
    month_label,
    month_range,
)
from hostel_billing.utils.money import sum_money, to_decimal, to_money, to_rate


class ProrationService:
    """
    Service for calculating prorated usage across calendar months.

    The calculation is pure: it reads no state and identical inputs always
    produce identical segments.
    """

    def __init__(self):
        self._logger = get_logger(self.__class__.__name__)

    def compute_usage(
        self,
        enrollment_date: date,
        end_date: date,
        monthly_fee: Decimal,
    ) -> List[UsageCalculation]:
        """
        Split [enrollment_date, end_date] into per-month usage segments.

        Args:
            enrollment_date: First day of the stay (charged)
            end_date: Last day of the stay (charged)
            monthly_fee: Full monthly fee

        Returns:
            One UsageCalculation per calendar month touched, in order

        Raises:
            InvalidDateRangeError: If end_date is before enrollment_date
            ValidationError: If monthly_fee is negative
        """
        if end_date < enrollment_date:
            raise InvalidDateRangeError(
                "End date cannot be before enrollment date",
                start_date=enrollment_date.isoformat(),
                end_date=end_date.isoformat(),
            )

        fee = to_decimal(monthly_fee)
        if fee < 0:
            raise ValidationError(
                "Monthly fee cannot be negative",
                field_errors={"monthly_fee": [f"got {fee}"]},
            )

        segments: List[UsageCalculation] = []

        for year, month in iter_months(enrollment_date, end_date):
            first_day, last_day = month_range(year, month)
            usage_start = max(first_day, enrollment_date)
            usage_end = min(last_day, end_date)

            month_days = days_in_month(year, month)
            days_used = inclusive_days(usage_start, usage_end)

            # Amount uses the unrounded rate; only emitted values are rounded
            daily_rate = fee / Decimal(month_days)
            amount = to_money(daily_rate * Decimal(days_used))

            segments.append(
                UsageCalculation(
                    month=f"{year:04d}-{month:02d}",
                    month_name=month_label(year, month),
                    year=year,
                    days_in_month=month_days,
                    days_used=days_used,
                    daily_rate=to_rate(daily_rate),
                    monthly_fee=to_money(fee),
                    amount=amount,
                    period_start=usage_start,
                    period_end=usage_end,
                    period=f"{usage_start.isoformat()} to {usage_end.isoformat()}",
                )
            )

        self._logger.debug(
            "Usage calculated",
            extra={
                "enrollment_date": enrollment_date.isoformat(),
                "end_date": end_date.isoformat(),
                "monthly_fee": str(fee),
                "months": len(segments),
                "total_usage": str(self.total_amount(segments)),
            },
        )

        return segments

    @staticmethod
    def total_amount(segments: List[UsageCalculation]) -> Decimal:
        """Sum of the already-rounded segment amounts."""
        return sum_money(segment.amount for segment in segments)

    @staticmethod
    def total_days(segments: List[UsageCalculation]) -> int:
        return sum(segment.days_used for segment in segments)
