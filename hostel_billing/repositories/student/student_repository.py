"""
Student Repository.

The billing engine reads students and only ever writes their placement.
"""

from typing import Optional

from sqlalchemy.orm import Session

from hostel_billing.models.student.student import Student
from hostel_billing.repositories.base.base_repository import BaseRepository


class StudentRepository(BaseRepository[Student]):
    """Repository for student lookups and placement updates."""

    def __init__(self, db: Session):
        super().__init__(Student, db)

    def update_placement(self, student: Student, room_id: Optional[str], bed_id: Optional[str]) -> Student:
        student.room_id = room_id
        student.bed_id = bed_id
        self.flush()
        return student
