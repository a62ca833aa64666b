"""
Room occupancy model.

One record per continuous stay of a student in a bed. Closing a record
sets ``check_out_date`` and moves it out of ACTIVE.
"""

from datetime import date
from typing import Optional

from sqlalchemy import Date, Enum as SQLEnum, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from hostel_billing.models.base.base_model import TimestampModel
from hostel_billing.models.base.enums import OccupancyStatus

__all__ = ["RoomOccupancy"]


class RoomOccupancy(TimestampModel):
    """Student stay in a specific bed."""

    __tablename__ = "room_occupancies"
    __table_args__ = (
        Index("ix_room_occupancy_student_status", "student_id", "status"),
        Index("ix_room_occupancy_room_status", "room_id", "status"),
    )

    room_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("rooms.id", ondelete="CASCADE"),
        nullable=False,
    )
    bed_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("beds.id", ondelete="CASCADE"),
        nullable=False,
    )
    student_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("students.id", ondelete="CASCADE"),
        nullable=False,
    )

    check_in_date: Mapped[date] = mapped_column(Date, nullable=False)
    check_out_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)

    status: Mapped[OccupancyStatus] = mapped_column(
        SQLEnum(OccupancyStatus, name="occupancy_status_enum"),
        nullable=False,
        default=OccupancyStatus.ACTIVE,
    )
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
