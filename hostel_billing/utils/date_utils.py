"""
Date utility functions used by the billing calculations.

Notes:
- All "UTC" helpers use timezone-aware datetimes with `timezone.utc`.
- Day counts are inclusive of both endpoints unless stated otherwise.
"""

import calendar
from datetime import date, datetime, timezone
from typing import Iterator, Tuple

UTC = timezone.utc


class DateUtilsError(Exception):
    """Custom exception for date utilities errors."""
    pass


def now_utc() -> datetime:
    """Return current UTC datetime (timezone-aware)."""
    return datetime.now(UTC)


def today_utc() -> date:
    """Return today's date in UTC."""
    return now_utc().date()


def days_in_month(year: int, month: int) -> int:
    """Number of calendar days in the month (leap-year aware)."""
    if not (1 <= month <= 12):
        raise DateUtilsError("Month must be between 1 and 12")
    return calendar.monthrange(year, month)[1]


def month_range(year: int, month: int) -> Tuple[date, date]:
    """Return (first_day, last_day) of a given month."""
    return date(year, month, 1), date(year, month, days_in_month(year, month))


def iter_months(start: date, end: date) -> Iterator[Tuple[int, int]]:
    """
    Yield (year, month) for every calendar month touched by [start, end].
    If start > end, yields nothing.
    """
    if not isinstance(start, date) or not isinstance(end, date):
        raise DateUtilsError("Both start and end must be date objects")

    year, month = start.year, start.month
    while (year, month) <= (end.year, end.month):
        yield year, month
        if month == 12:
            year, month = year + 1, 1
        else:
            month += 1


def inclusive_days(start: date, end: date) -> int:
    """Day count between two dates with both endpoints counted."""
    if start > end:
        raise DateUtilsError("Start date must not be after end date")
    return (end - start).days + 1


def month_label(year: int, month: int) -> str:
    """Human readable month label, e.g. 'February 2024'."""
    return f"{calendar.month_name[month]} {year}"
