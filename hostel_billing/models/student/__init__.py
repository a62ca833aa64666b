"""Student models."""

from hostel_billing.models.student.student import Student

__all__ = ["Student"]
