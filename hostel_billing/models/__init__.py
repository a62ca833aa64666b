"""
Database models for the billing engine.
"""

from hostel_billing.models.base import Base
from hostel_billing.models.audit import BedSwitchAudit
from hostel_billing.models.fee_structure import FeeComponent
from hostel_billing.models.ledger import LedgerEntry, LedgerSequence
from hostel_billing.models.payment import Payment
from hostel_billing.models.room import Bed, Room, RoomOccupancy
from hostel_billing.models.student import Student

__all__ = [
    "Base",
    "BedSwitchAudit",
    "FeeComponent",
    "LedgerEntry",
    "LedgerSequence",
    "Payment",
    "Bed",
    "Room",
    "RoomOccupancy",
    "Student",
]
