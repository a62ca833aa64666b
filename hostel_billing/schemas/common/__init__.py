"""Common schema building blocks."""

from hostel_billing.schemas.common.base import BaseCreateSchema, BaseResponseSchema, BaseSchema

__all__ = ["BaseCreateSchema", "BaseResponseSchema", "BaseSchema"]
