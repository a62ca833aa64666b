"""
Payment model.

Payments are recorded by the payments collaborator; the billing engine
reads COMPLETED rows and writes REFUND and SETTLEMENT rows at checkout.
"""

from datetime import date
from decimal import Decimal
from typing import Optional

from sqlalchemy import (
    CheckConstraint,
    Date,
    Enum as SQLEnum,
    ForeignKey,
    Index,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column

from hostel_billing.models.base.base_model import TimestampModel
from hostel_billing.models.base.enums import PaymentMethod, PaymentStatus, PaymentType

__all__ = ["Payment"]


class Payment(TimestampModel):
    """Money received from or returned to a student."""

    __tablename__ = "payments"
    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_payment_amount_positive"),
        Index("ix_payment_student_status", "student_id", "status"),
    )

    # ==================== Foreign Keys ====================
    student_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("students.id", ondelete="CASCADE"),
        nullable=False,
    )
    hostel_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)

    # ==================== Payment Details ====================
    amount: Mapped[Decimal] = mapped_column(
        Numeric(precision=12, scale=2),
        nullable=False,
    )
    payment_type: Mapped[PaymentType] = mapped_column(
        SQLEnum(PaymentType, name="payment_type_enum"),
        nullable=False,
    )
    payment_method: Mapped[PaymentMethod] = mapped_column(
        SQLEnum(PaymentMethod, name="payment_method_enum"),
        nullable=False,
        default=PaymentMethod.CASH,
    )
    status: Mapped[PaymentStatus] = mapped_column(
        SQLEnum(PaymentStatus, name="payment_status_enum"),
        nullable=False,
        default=PaymentStatus.PENDING,
    )
    payment_date: Mapped[date] = mapped_column(Date, nullable=False)
    month_covered: Mapped[Optional[str]] = mapped_column(
        String(7),
        nullable=True,
        comment="Billing month in YYYY-MM form",
    )

    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    processed_by: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
