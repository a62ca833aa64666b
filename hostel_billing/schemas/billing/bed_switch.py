"""
Bed switch schemas.
"""

from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import Field

from hostel_billing.schemas.common.base import BaseCreateSchema, BaseSchema

__all__ = ["BedSwitchRequest", "SwitchResult"]


class BedSwitchRequest(BaseCreateSchema):
    """Bed switch request body."""

    new_bed_id: str = Field(..., min_length=1, description="Target bed")
    effective_date: Optional[date] = Field(None, description="Defaults to today")
    reason: Optional[str] = Field(None, max_length=500)
    approved_by: Optional[str] = Field(None, max_length=100)


class SwitchResult(BaseSchema):
    """Result of a bed switch, including the financial snapshot."""

    student_id: str
    from_bed_id: str
    to_bed_id: str
    from_room_id: str
    to_room_id: str
    effective_date: date
    old_rate: Decimal
    new_rate: Decimal
    rate_difference: Decimal = Field(..., description="New rate minus old rate")
    rate_changed: bool
    ledger_entry_id: Optional[str] = Field(None, description="Rate adjustment entry, if any")
    new_fee_component_id: Optional[str] = Field(None, description="Replacement BASE_MONTHLY component")
    old_balance: Decimal
    new_balance: Decimal
    advance_adjustment: Decimal = Field(..., description="Old balance minus new balance")
    audit_id: str
    message: str
