"""
Ledger schemas.

Entry creation payload, stored entry view, balance and reversal request.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import Field, field_validator

from hostel_billing.models.base.enums import BalanceType, LedgerEntryType
from hostel_billing.schemas.common.base import BaseCreateSchema, BaseResponseSchema, BaseSchema
from hostel_billing.utils.money import to_money

__all__ = [
    "LedgerEntryCreate",
    "LedgerEntryResponse",
    "LedgerBalance",
    "LedgerReversalRequest",
]


class LedgerEntryCreate(BaseCreateSchema):
    """
    Ledger entry creation payload.

    Direction checks (exactly one of debit/credit positive) are enforced
    by the ledger service so callers get a domain error.
    """

    student_id: str = Field(..., description="Student ID")
    hostel_id: str = Field(..., description="Hostel ID")
    entry_date: date = Field(..., description="Accounting date of the movement")
    entry_type: LedgerEntryType = Field(..., description="Entry type")
    debit: Decimal = Field(Decimal("0.00"), description="Amount owed by the student")
    credit: Decimal = Field(Decimal("0.00"), description="Amount credited to the student")
    description: str = Field(..., min_length=1, max_length=500, description="Entry description")
    reference_id: Optional[str] = Field(None, description="Related payment or audit record")
    notes: Optional[str] = Field(None, max_length=2000)

    @field_validator("debit", "credit")
    @classmethod
    def quantize_amount(cls, v: Decimal) -> Decimal:
        return to_money(v)


class LedgerEntryResponse(BaseResponseSchema):
    """Stored ledger entry."""

    student_id: str
    hostel_id: str
    entry_date: date
    entry_type: LedgerEntryType
    debit: Decimal
    credit: Decimal
    description: str
    reference_id: Optional[str] = None
    notes: Optional[str] = None
    entry_sequence: int
    is_reversed: bool
    reversed_by: Optional[str] = None
    reversal_date: Optional[datetime] = None
    reversal_reason: Optional[str] = None


class LedgerBalance(BaseSchema):
    """
    Student balance over non-reversed entries.

    ``amount`` is debits minus credits: positive is owed by the student (Dr),
    negative is credit held for the student (Cr).
    """

    student_id: str = Field(..., description="Student ID")
    as_of: Optional[date] = Field(None, description="Only entries dated on or before this day")
    total_debits: Decimal = Field(..., description="Sum of debits")
    total_credits: Decimal = Field(..., description="Sum of credits")
    amount: Decimal = Field(..., description="Signed balance")
    direction: BalanceType = Field(..., description="Dr, Cr or Nil")
    total_entries: int = Field(..., ge=0, description="Entries included")

    @property
    def absolute_amount(self) -> Decimal:
        return abs(self.amount)


class LedgerReversalRequest(BaseCreateSchema):
    """Reversal request for a ledger entry."""

    reason: str = Field(..., min_length=3, max_length=500, description="Why the entry is reversed")
    reversed_by: Optional[str] = Field(None, max_length=100, description="Who reversed it")
