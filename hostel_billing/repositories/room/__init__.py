"""Room, bed and occupancy repositories."""

from hostel_billing.repositories.room.bed_repository import BedRepository
from hostel_billing.repositories.room.room_occupancy_repository import RoomOccupancyRepository
from hostel_billing.repositories.room.room_repository import RoomRepository

__all__ = ["BedRepository", "RoomOccupancyRepository", "RoomRepository"]
