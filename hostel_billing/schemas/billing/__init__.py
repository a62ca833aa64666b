"""Billing schemas."""

from hostel_billing.schemas.billing.bed_switch import BedSwitchRequest, SwitchResult
from hostel_billing.schemas.billing.settlement import (
    CheckoutSettlement,
    PaymentBreakdownItem,
    SettlementRequest,
    SettlementResult,
    SettlementSummary,
    SettlementValidation,
)
from hostel_billing.schemas.billing.usage import UsageCalculation

__all__ = [
    "BedSwitchRequest",
    "SwitchResult",
    "CheckoutSettlement",
    "PaymentBreakdownItem",
    "SettlementRequest",
    "SettlementResult",
    "SettlementSummary",
    "SettlementValidation",
    "UsageCalculation",
]
