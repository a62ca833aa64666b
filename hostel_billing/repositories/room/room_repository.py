"""
Room Repository.
"""

from sqlalchemy.orm import Session

from hostel_billing.models.room.room import Room
from hostel_billing.repositories.base.base_repository import BaseRepository


class RoomRepository(BaseRepository[Room]):
    """Repository for rooms and their occupancy cache."""

    def __init__(self, db: Session):
        super().__init__(Room, db)

    def set_occupied_beds(self, room: Room, count: int) -> Room:
        room.occupied_beds = count
        self.flush()
        return room
