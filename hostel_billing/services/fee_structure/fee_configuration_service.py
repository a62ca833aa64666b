"""
Fee Configuration Service

Resolves a student's monthly fee from their active fee components and
maintains those components:
- Itemized monthly fee (room rent, laundry, food, utilities, maintenance,
  ad-hoc charges)
- Component creation with one-active-per-type enforcement
- Supersession of a component when a rate changes

The service works inside the caller's session and never commits.
"""

from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from hostel_billing.core.exceptions import (
    DuplicateEntryError,
    InvalidConfigurationError,
    NoActiveConfigurationError,
    StudentNotFoundError,
    ValidationError,
)
from hostel_billing.core.logging import get_logger
from hostel_billing.models.base.enums import FeeType
from hostel_billing.models.fee_structure.fee_component import FeeComponent
from hostel_billing.repositories.fee_structure.fee_component_repository import FeeComponentRepository
from hostel_billing.repositories.student.student_repository import StudentRepository
from hostel_billing.schemas.fee_structure.fee_calculation import (
    FeeBreakdownItem,
    MonthlyFeeCalculation,
)
from hostel_billing.utils.money import ZERO, to_decimal, to_money


class FeeConfigurationService:
    """
    Service for a student's recurring fee configuration.

    The monthly fee is never cached: every call reads the components that
    are active at that moment.
    """

    FEE_DESCRIPTIONS = {
        FeeType.BASE_MONTHLY: "Monthly Room Rent",
        FeeType.LAUNDRY: "Laundry Service",
        FeeType.FOOD: "Food Service",
        FeeType.UTILITIES: "Utilities (WiFi, etc.)",
        FeeType.MAINTENANCE: "Maintenance Fee",
    }

    # Per-type totals reported on MonthlyFeeCalculation
    FEE_FIELDS = {
        FeeType.BASE_MONTHLY: "base_monthly_fee",
        FeeType.LAUNDRY: "laundry_fee",
        FeeType.FOOD: "food_fee",
        FeeType.UTILITIES: "utilities_fee",
        FeeType.MAINTENANCE: "maintenance_fee",
        FeeType.ADDITIONAL: "additional_fee",
    }

    def __init__(self, db_session: Session):
        """
        Initialize fee configuration service.

        Args:
            db_session: SQLAlchemy database session
        """
        self.db = db_session
        self.fee_repo = FeeComponentRepository(db_session)
        self.student_repo = StudentRepository(db_session)
        self._logger = get_logger(self.__class__.__name__)

    # ==================== Resolution ====================

    def resolve_monthly_fee(self, student_id: str) -> MonthlyFeeCalculation:
        """
        Sum the student's active fee components.

        Raises:
            NoActiveConfigurationError: If the student has no active component
            InvalidConfigurationError: If the total is not positive
        """
        components = self.fee_repo.list_active(student_id)
        if not components:
            raise NoActiveConfigurationError(student_id)

        totals: Dict[FeeType, Decimal] = {fee_type: ZERO for fee_type in self.FEE_FIELDS}
        breakdown: List[FeeBreakdownItem] = []

        for component in components:
            amount = to_money(component.amount)
            totals[component.fee_type] += amount
            breakdown.append(
                FeeBreakdownItem(
                    fee_type=component.fee_type,
                    description=self._describe(component),
                    amount=amount,
                    component_id=component.id,
                )
            )

        total = to_money(sum(totals.values(), ZERO))
        if total <= 0:
            raise InvalidConfigurationError(
                "Total monthly fee must be greater than zero",
                config_key="total_monthly_fee",
                config_value=total,
            )

        calculation = MonthlyFeeCalculation(
            student_id=student_id,
            total_monthly_fee=total,
            breakdown=breakdown,
            **{field: to_money(totals[fee_type]) for fee_type, field in self.FEE_FIELDS.items()},
        )

        self._logger.debug(
            "Monthly fee resolved",
            extra={
                "student_id": student_id,
                "components": len(components),
                "total_monthly_fee": str(total),
            },
        )
        return calculation

    def list_active_components(self, student_id: str) -> List[FeeComponent]:
        return self.fee_repo.list_active(student_id)

    # ==================== Maintenance ====================

    def create_component(
        self,
        student_id: str,
        fee_type: FeeType,
        amount: Decimal,
        effective_from: date,
        notes: Optional[str] = None,
    ) -> FeeComponent:
        """
        Add an active fee component.

        Raises:
            StudentNotFoundError: If the student does not exist
            ValidationError: If the amount is negative
            DuplicateEntryError: If another active component of this type
                exists (ADDITIONAL excepted)
        """
        amount = to_decimal(amount)
        if amount < 0:
            raise ValidationError(
                "Fee amount cannot be negative",
                field_errors={"amount": [f"got {amount}"]},
            )

        if self.student_repo.find_by_id(student_id) is None:
            raise StudentNotFoundError(student_id)

        if fee_type != FeeType.ADDITIONAL and self.fee_repo.find_active(student_id, fee_type):
            raise DuplicateEntryError(
                f"Student already has an active {fee_type.value} component",
                field="fee_type",
                value=fee_type.value,
                table=FeeComponent.__tablename__,
            )

        component = self.fee_repo.create(
            FeeComponent(
                student_id=student_id,
                fee_type=fee_type,
                amount=to_money(amount),
                effective_from=effective_from,
                is_active=True,
                notes=notes,
            )
        )

        self._logger.info(
            f"Fee component created: {fee_type.value}",
            extra={
                "student_id": student_id,
                "fee_type": fee_type.value,
                "amount": str(component.amount),
                "effective_from": effective_from.isoformat(),
            },
        )
        return component

    def deactivate(self, student_id: str, fee_type: FeeType, effective_to: date) -> int:
        """Close the active components of this type. Returns how many were closed."""
        closed = self.fee_repo.deactivate(student_id, fee_type, effective_to)
        if closed:
            self._logger.info(
                f"Fee components deactivated: {fee_type.value}",
                extra={
                    "student_id": student_id,
                    "fee_type": fee_type.value,
                    "count": len(closed),
                    "effective_to": effective_to.isoformat(),
                },
            )
        return len(closed)

    def supersede_component(
        self,
        student_id: str,
        fee_type: FeeType,
        amount: Decimal,
        effective_date: date,
        notes: Optional[str] = None,
    ) -> FeeComponent:
        """Replace the active component of this type with a new amount from effective_date."""
        self.deactivate(student_id, fee_type, effective_date)
        return self.create_component(student_id, fee_type, amount, effective_date, notes)

    def configure_student_fees(
        self,
        student_id: str,
        amounts: Dict[FeeType, Decimal],
        effective_from: date,
    ) -> List[FeeComponent]:
        """Set the student's fee for each given type, superseding what was there."""
        components = []
        for fee_type, amount in amounts.items():
            components.append(
                self.supersede_component(student_id, fee_type, amount, effective_from)
            )
        return components

    # ==================== Helpers ====================

    def _describe(self, component: FeeComponent) -> str:
        if component.fee_type == FeeType.ADDITIONAL:
            return component.notes or "Additional Charge"
        return self.FEE_DESCRIPTIONS[component.fee_type]
