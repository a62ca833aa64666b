"""
Room Occupancy Repository.

Opens and closes the occupancy records that back bed assignments.
"""

from datetime import date
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from hostel_billing.models.base.enums import OccupancyStatus
from hostel_billing.models.room.room_occupancy import RoomOccupancy
from hostel_billing.repositories.base.base_repository import BaseRepository


class RoomOccupancyRepository(BaseRepository[RoomOccupancy]):
    """Repository for room occupancy records."""

    def __init__(self, db: Session):
        super().__init__(RoomOccupancy, db)

    def find_active(self, student_id: str) -> List[RoomOccupancy]:
        return self.list_by(
            RoomOccupancy.student_id == student_id,
            RoomOccupancy.status == OccupancyStatus.ACTIVE,
        )

    def open(
        self,
        room_id: str,
        bed_id: str,
        student_id: str,
        check_in_date: date,
        notes: Optional[str] = None,
    ) -> RoomOccupancy:
        return self.create(
            RoomOccupancy(
                room_id=room_id,
                bed_id=bed_id,
                student_id=student_id,
                check_in_date=check_in_date,
                status=OccupancyStatus.ACTIVE,
                notes=notes,
            )
        )

    def close_active(
        self,
        student_id: str,
        check_out_date: date,
        status: OccupancyStatus = OccupancyStatus.CHECKED_OUT,
    ) -> List[RoomOccupancy]:
        """Close every active record of the student; returns the closed rows."""
        records = self.find_active(student_id)
        for record in records:
            record.check_out_date = check_out_date
            record.status = status
        if records:
            self.flush()
        return records

    def count_active(self, room_id: str) -> int:
        stmt = select(func.count(RoomOccupancy.id)).where(
            RoomOccupancy.room_id == room_id,
            RoomOccupancy.status == OccupancyStatus.ACTIVE,
        )
        return int(self.db.execute(stmt).scalar() or 0)
