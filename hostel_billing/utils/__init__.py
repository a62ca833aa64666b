"""
Utility package for date arithmetic and money handling.
"""

from hostel_billing.utils.date_utils import (
    days_in_month,
    inclusive_days,
    iter_months,
    month_label,
    today_utc,
)
from hostel_billing.utils.money import to_decimal, to_money, to_rate

__all__ = [
    "days_in_month",
    "inclusive_days",
    "iter_months",
    "month_label",
    "today_utc",
    "to_decimal",
    "to_money",
    "to_rate",
]
