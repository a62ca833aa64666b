"""Fee structure schemas."""

from hostel_billing.schemas.fee_structure.fee_calculation import (
    FeeBreakdownItem,
    FeeComponentCreate,
    FeeComponentResponse,
    MonthlyFeeCalculation,
    StudentFeeConfiguration,
)

__all__ = [
    "FeeBreakdownItem",
    "FeeComponentCreate",
    "FeeComponentResponse",
    "MonthlyFeeCalculation",
    "StudentFeeConfiguration",
]
