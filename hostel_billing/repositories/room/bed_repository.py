"""
Bed Repository.
"""

from typing import Optional

from sqlalchemy.orm import Session

from hostel_billing.models.base.enums import BedStatus
from hostel_billing.models.room.bed import Bed
from hostel_billing.repositories.base.base_repository import BaseRepository


class BedRepository(BaseRepository[Bed]):
    """Repository for bed status and occupant changes."""

    def __init__(self, db: Session):
        super().__init__(Bed, db)

    def set_status(self, bed: Bed, status: BedStatus, occupant_id: Optional[str] = None) -> Bed:
        bed.status = status
        bed.current_student_id = occupant_id
        self.flush()
        return bed

    def release(self, bed: Bed) -> Bed:
        return self.set_status(bed, BedStatus.AVAILABLE, None)

    def occupy(self, bed: Bed, student_id: str) -> Bed:
        return self.set_status(bed, BedStatus.OCCUPIED, student_id)
