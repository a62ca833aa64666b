"""Student repositories."""

from hostel_billing.repositories.student.student_repository import StudentRepository

__all__ = ["StudentRepository"]
