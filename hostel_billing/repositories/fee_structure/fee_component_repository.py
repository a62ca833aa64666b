"""
Fee Component Repository.

Storage for a student's effective-dated fee components.
"""

from datetime import date
from typing import List, Optional

from sqlalchemy.orm import Session

from hostel_billing.models.base.enums import FeeType
from hostel_billing.models.fee_structure.fee_component import FeeComponent
from hostel_billing.repositories.base.base_repository import BaseRepository


class FeeComponentRepository(BaseRepository[FeeComponent]):
    """Repository for fee component operations."""

    def __init__(self, db: Session):
        super().__init__(FeeComponent, db)

    def list_active(self, student_id: str) -> List[FeeComponent]:
        return self.list_by(
            FeeComponent.student_id == student_id,
            FeeComponent.is_active.is_(True),
            order_by=(FeeComponent.fee_type, FeeComponent.effective_from),
        )

    def list_history(self, student_id: str, fee_type: Optional[FeeType] = None) -> List[FeeComponent]:
        criteria = [FeeComponent.student_id == student_id]
        if fee_type is not None:
            criteria.append(FeeComponent.fee_type == fee_type)
        return self.list_by(*criteria, order_by=(FeeComponent.effective_from, FeeComponent.created_at))

    def find_active(self, student_id: str, fee_type: FeeType) -> List[FeeComponent]:
        return self.list_by(
            FeeComponent.student_id == student_id,
            FeeComponent.fee_type == fee_type,
            FeeComponent.is_active.is_(True),
        )

    def deactivate(self, student_id: str, fee_type: FeeType, effective_to: date) -> List[FeeComponent]:
        """Close every active component of this type; returns the closed rows."""
        components = self.find_active(student_id, fee_type)
        for component in components:
            component.is_active = False
            component.effective_to = effective_to
        if components:
            self.flush()
        return components
