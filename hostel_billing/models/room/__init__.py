"""Room, bed and occupancy models."""

from hostel_billing.models.room.bed import Bed
from hostel_billing.models.room.room import Room
from hostel_billing.models.room.room_occupancy import RoomOccupancy

__all__ = ["Bed", "Room", "RoomOccupancy"]
