"""
Checkout settlement schemas.
"""

from datetime import date
from decimal import Decimal
from typing import List, Optional

from pydantic import Field

from hostel_billing.models.base.enums import PaymentType, SettlementType
from hostel_billing.schemas.billing.usage import UsageCalculation
from hostel_billing.schemas.common.base import BaseCreateSchema, BaseSchema

__all__ = [
    "PaymentBreakdownItem",
    "SettlementSummary",
    "CheckoutSettlement",
    "SettlementRequest",
    "SettlementResult",
    "SettlementValidation",
]


class PaymentBreakdownItem(BaseSchema):
    """Completed payment counted towards a settlement."""

    payment_id: str
    payment_type: PaymentType
    amount: Decimal
    payment_date: date
    month_covered: Optional[str] = None


class SettlementSummary(BaseSchema):
    """Classification of a settlement."""

    settlement_type: SettlementType = Field(..., description="Balanced, refund or additional payment")
    settlement_amount: Decimal = Field(..., description="Amount to refund or collect")
    is_refund_due: bool
    is_additional_payment_due: bool


class CheckoutSettlement(BaseSchema):
    """
    Reconciliation of payments made against prorated usage at checkout.

    ``net_settlement`` is payments minus usage: positive means the hostel
    owes the student.
    """

    student_id: str
    student_name: str
    hostel_id: str
    enrollment_date: date
    checkout_date: date
    monthly_fee: Decimal
    total_days_stayed: int
    total_payments_made: Decimal
    total_actual_usage: Decimal
    refund_due: Decimal
    additional_due: Decimal
    net_settlement: Decimal
    usage_breakdown: List[UsageCalculation] = Field(default_factory=list)
    payment_breakdown: List[PaymentBreakdownItem] = Field(default_factory=list)
    settlement_summary: SettlementSummary


class SettlementRequest(BaseCreateSchema):
    """Checkout settlement request body."""

    checkout_date: date = Field(..., description="Last day of stay")
    notes: Optional[str] = Field(None, max_length=1000, description="Notes stored on the payment")


class SettlementResult(BaseSchema):
    """Outcome of processing a settlement."""

    success: bool = True
    settlement: CheckoutSettlement
    payment_id: Optional[str] = Field(None, description="Refund or settlement payment created")
    ledger_entry_id: Optional[str] = Field(None, description="Adjustment entry created")
    message: str


class SettlementValidation(BaseSchema):
    """Pre-checkout sanity check."""

    is_valid: bool
    issues: List[str] = Field(default_factory=list)
    settlement: Optional[CheckoutSettlement] = None
