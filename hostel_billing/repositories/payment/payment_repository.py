"""
Payment Repository.
"""

from typing import List

from sqlalchemy.orm import Session

from hostel_billing.models.base.enums import PaymentStatus
from hostel_billing.models.payment.payment import Payment
from hostel_billing.repositories.base.base_repository import BaseRepository


class PaymentRepository(BaseRepository[Payment]):
    """Repository for payment records."""

    def __init__(self, db: Session):
        super().__init__(Payment, db)

    def list_completed(self, student_id: str) -> List[Payment]:
        """Completed payments for a student, oldest first."""
        return self.list_by(
            Payment.student_id == student_id,
            Payment.status == PaymentStatus.COMPLETED,
            order_by=(Payment.payment_date, Payment.created_at),
        )

    def list_for_student(self, student_id: str) -> List[Payment]:
        return self.list_by(
            Payment.student_id == student_id,
            order_by=(Payment.payment_date, Payment.created_at),
        )
