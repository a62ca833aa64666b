"""
Usage calculation schemas.
"""

from datetime import date
from decimal import Decimal

from pydantic import Field

from hostel_billing.schemas.common.base import BaseSchema

__all__ = ["UsageCalculation"]


class UsageCalculation(BaseSchema):
    """
    Prorated charge for one calendar month of a stay.

    ``daily_rate`` is shown to 4 places; ``amount`` is computed from the
    unrounded rate and rounded to 2 places.
    """

    month: str = Field(..., description="Billing month, YYYY-MM")
    month_name: str = Field(..., description="Month label, e.g. 'January 2024'")
    year: int = Field(..., description="Calendar year")
    days_in_month: int = Field(..., ge=28, le=31, description="Days in the calendar month")
    days_used: int = Field(..., ge=1, description="Days of the month inside the stay")
    daily_rate: Decimal = Field(..., description="Monthly fee / days in month")
    monthly_fee: Decimal = Field(..., description="Monthly fee used for the month")
    amount: Decimal = Field(..., description="Charge for the days used")
    period_start: date = Field(..., description="First day charged")
    period_end: date = Field(..., description="Last day charged")
    period: str = Field(..., description="Human readable period")
