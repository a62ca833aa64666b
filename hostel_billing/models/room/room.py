"""
Room model.

Rooms own beds and carry the default monthly rate for beds that have
no rate of their own. ``occupied_beds`` is a derived cache kept in sync
after occupancy changes.
"""

from decimal import Decimal
from typing import List, Optional

from sqlalchemy import Integer, Numeric, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hostel_billing.models.base.base_model import TimestampModel

__all__ = ["Room"]


class Room(TimestampModel):
    """Hostel room."""

    __tablename__ = "rooms"
    __table_args__ = (
        UniqueConstraint("hostel_id", "room_number", name="uq_room_hostel_number"),
    )

    hostel_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    room_number: Mapped[str] = mapped_column(String(20), nullable=False)

    monthly_rate: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(precision=12, scale=2),
        nullable=True,
        comment="Default monthly rate per bed",
    )

    bed_count: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    occupied_beds: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        comment="Derived from active occupancy records",
    )

    beds: Mapped[List["Bed"]] = relationship(  # noqa: F821
        "Bed",
        back_populates="room",
        order_by="Bed.bed_number",
    )

    @property
    def available_beds(self) -> int:
        return max(0, self.bed_count - self.occupied_beds)
