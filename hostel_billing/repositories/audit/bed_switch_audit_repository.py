"""
Bed Switch Audit Repository.
"""

from typing import List

from sqlalchemy.orm import Session

from hostel_billing.models.audit.bed_switch_audit import BedSwitchAudit
from hostel_billing.repositories.base.base_repository import BaseRepository


class BedSwitchAuditRepository(BaseRepository[BedSwitchAudit]):
    """Repository for bed switch audit records."""

    def __init__(self, db: Session):
        super().__init__(BedSwitchAudit, db)

    def list_for_student(self, student_id: str) -> List[BedSwitchAudit]:
        return self.list_by(
            BedSwitchAudit.student_id == student_id,
            order_by=(BedSwitchAudit.switch_date, BedSwitchAudit.created_at),
        )
