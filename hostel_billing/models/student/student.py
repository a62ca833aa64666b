"""
Student model.

Carries the subset of the student record the billing engine reads
(enrollment date, status, hostel) and writes (room/bed placement).
"""

from datetime import date
from typing import Optional

from sqlalchemy import Date, Enum as SQLEnum, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from hostel_billing.models.base.base_model import TimestampModel
from hostel_billing.models.base.enums import StudentStatus

__all__ = ["Student"]


class Student(TimestampModel):
    """Student enrolled in a hostel."""

    __tablename__ = "students"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    hostel_id: Mapped[str] = mapped_column(
        String(36),
        nullable=False,
        index=True,
        comment="Hostel/tenant identifier",
    )
    enrollment_date: Mapped[Optional[date]] = mapped_column(
        Date,
        nullable=True,
        comment="First day of stay, start of usage accrual",
    )
    status: Mapped[StudentStatus] = mapped_column(
        SQLEnum(StudentStatus, name="student_status_enum"),
        nullable=False,
        default=StudentStatus.ACTIVE,
        index=True,
    )

    # Current placement
    room_id: Mapped[Optional[str]] = mapped_column(
        String(36),
        ForeignKey("rooms.id", ondelete="SET NULL"),
        nullable=True,
    )
    bed_id: Mapped[Optional[str]] = mapped_column(
        String(36),
        nullable=True,
        comment="Current bed, mirrors beds.current_student_id",
    )

    @property
    def is_active(self) -> bool:
        return self.status == StudentStatus.ACTIVE
