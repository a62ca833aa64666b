"""
Fee component model.

A student's monthly fee is the sum of their active fee components.
Superseded components stay on record with ``is_active`` cleared and
``effective_to`` set.
"""

from datetime import date
from decimal import Decimal
from typing import Optional

from sqlalchemy import (
    Boolean,
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
from hostel_billing.models.base.enums import FeeType

__all__ = ["FeeComponent"]


class FeeComponent(TimestampModel):
    """
    Single recurring monthly charge for a student.

    At most one active component per (student, fee type) is allowed,
    except ADDITIONAL which may have several.
    """

    __tablename__ = "fee_components"
    __table_args__ = (
        CheckConstraint("amount >= 0", name="ck_fee_component_amount_non_negative"),
        Index("ix_fee_component_student_active", "student_id", "is_active"),
    )

    student_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("students.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    fee_type: Mapped[FeeType] = mapped_column(
        SQLEnum(FeeType, name="fee_type_enum"),
        nullable=False,
    )
    amount: Mapped[Decimal] = mapped_column(
        Numeric(precision=12, scale=2),
        nullable=False,
    )

    # ==================== Effective Dating ====================
    effective_from: Mapped[date] = mapped_column(Date, nullable=False)
    effective_to: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
