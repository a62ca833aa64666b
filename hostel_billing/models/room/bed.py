"""
Bed model.

A bed belongs to a room and may carry its own monthly rate; when it does
not, the room rate applies.
"""

from decimal import Decimal
from typing import Optional

from sqlalchemy import Enum as SQLEnum, ForeignKey, Numeric, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hostel_billing.models.base.base_model import TimestampModel
from hostel_billing.models.base.enums import BedStatus

__all__ = ["Bed"]


class Bed(TimestampModel):
    """
    Individual bed within a room.
    """

    __tablename__ = "beds"
    __table_args__ = (
        UniqueConstraint("room_id", "bed_number", name="uq_bed_room_number"),
    )

    # Room Association
    room_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("rooms.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    bed_number: Mapped[str] = mapped_column(String(10), nullable=False)

    monthly_rate: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(precision=12, scale=2),
        nullable=True,
        comment="Overrides the room rate when set",
    )

    status: Mapped[BedStatus] = mapped_column(
        SQLEnum(BedStatus, name="bed_status_enum"),
        nullable=False,
        default=BedStatus.AVAILABLE,
        index=True,
    )
    current_student_id: Mapped[Optional[str]] = mapped_column(
        String(36),
        ForeignKey("students.id", ondelete="SET NULL"),
        nullable=True,
    )

    room: Mapped["Room"] = relationship("Room", back_populates="beds")  # noqa: F821

    @property
    def effective_rate(self) -> Optional[Decimal]:
        """Bed rate, falling back to the room rate."""
        if self.monthly_rate is not None:
            return self.monthly_rate
        return self.room.monthly_rate if self.room is not None else None

    @property
    def is_available(self) -> bool:
        return self.status == BedStatus.AVAILABLE
