"""
Fee calculation schemas.

Itemized monthly fee produced from a student's active fee components.
"""

from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional

from pydantic import Field, field_validator

from hostel_billing.models.base.enums import FeeType
from hostel_billing.schemas.common.base import BaseCreateSchema, BaseResponseSchema, BaseSchema
from hostel_billing.utils.money import to_money

__all__ = [
    "FeeBreakdownItem",
    "MonthlyFeeCalculation",
    "FeeComponentCreate",
    "FeeComponentResponse",
    "StudentFeeConfiguration",
]


class FeeBreakdownItem(BaseSchema):
    """One line of a monthly fee breakdown."""

    fee_type: FeeType = Field(..., description="Fee component type")
    description: str = Field(..., description="Human readable label")
    amount: Decimal = Field(..., description="Monthly amount")
    component_id: Optional[str] = Field(None, description="Source fee component")


class MonthlyFeeCalculation(BaseSchema):
    """
    Aggregated monthly fee for a student.

    ``total_monthly_fee`` is the canonical monthly fee used by every
    usage and settlement calculation.
    """

    student_id: str = Field(..., description="Student ID")
    base_monthly_fee: Decimal = Field(Decimal("0.00"), description="Room rent")
    laundry_fee: Decimal = Field(Decimal("0.00"), description="Laundry service")
    food_fee: Decimal = Field(Decimal("0.00"), description="Food service")
    utilities_fee: Decimal = Field(Decimal("0.00"), description="Utilities")
    maintenance_fee: Decimal = Field(Decimal("0.00"), description="Maintenance")
    additional_fee: Decimal = Field(Decimal("0.00"), description="Sum of ad-hoc charges")
    total_monthly_fee: Decimal = Field(..., description="Sum of all active components")
    breakdown: List[FeeBreakdownItem] = Field(default_factory=list, description="Itemized components")


class FeeComponentCreate(BaseCreateSchema):
    """Fee component creation payload."""

    student_id: str = Field(..., description="Student ID")
    fee_type: FeeType = Field(..., description="Fee component type")
    amount: Decimal = Field(..., ge=0, description="Monthly amount")
    effective_from: date = Field(..., description="First day the component applies")
    notes: Optional[str] = Field(None, max_length=1000, description="Label for ad-hoc charges")

    @field_validator("amount")
    @classmethod
    def quantize_amount(cls, v: Decimal) -> Decimal:
        return to_money(v)


class FeeComponentResponse(BaseResponseSchema):
    """Fee component as stored."""

    student_id: str
    fee_type: FeeType
    amount: Decimal
    effective_from: date
    effective_to: Optional[date] = None
    is_active: bool
    notes: Optional[str] = None


class StudentFeeConfiguration(BaseCreateSchema):
    """Full fee setup for a student, one amount per fee type."""

    amounts: Dict[FeeType, Decimal] = Field(..., min_length=1, description="Monthly amount per fee type")
    effective_from: date = Field(..., description="First day the configuration applies")

    @field_validator("amounts")
    @classmethod
    def validate_amounts(cls, v: Dict[FeeType, Decimal]) -> Dict[FeeType, Decimal]:
        for fee_type, amount in v.items():
            if amount < 0:
                raise ValueError(f"{fee_type.value} amount cannot be negative")
        return {fee_type: to_money(amount) for fee_type, amount in v.items()}
