"""
Results for operations that report failure instead of raising.

Billing operations raise domain exceptions. Side effects that run after a
commit (notifications, occupancy resync) must never undo or mask the
committed work, so they return a ServiceResult the caller can log.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Generic, Optional, TypeVar


class ErrorCode(str, Enum):
    """Failure categories for side-effect operations."""

    INTERNAL_ERROR = "INTERNAL_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"
    EXTERNAL_SERVICE_ERROR = "EXTERNAL_SERVICE_ERROR"


class ErrorSeverity(str, Enum):
    WARNING = "WARNING"
    ERROR = "ERROR"


@dataclass
class ServiceError:
    """A side-effect failure with the context needed to log it."""

    code: ErrorCode
    message: str
    severity: ErrorSeverity = ErrorSeverity.ERROR
    details: Dict[str, Any] = field(default_factory=dict)
    occurred_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


TData = TypeVar("TData")


@dataclass
class ServiceResult(Generic[TData]):
    """
    Success/failure outcome of a side-effect operation.

    Truthy on success, so callers can write ``if not outcome: log(...)``.
    """

    is_success: bool
    data: Optional[TData] = None
    error: Optional[ServiceError] = None
    message: Optional[str] = None

    @classmethod
    def success(cls, data: Optional[TData] = None, message: Optional[str] = None) -> "ServiceResult[TData]":
        return cls(is_success=True, data=data, message=message)

    @classmethod
    def failure(cls, error: ServiceError) -> "ServiceResult[TData]":
        return cls(is_success=False, error=error, message=error.message)

    @classmethod
    def from_exception(
        cls,
        exception: Exception,
        operation: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
    ) -> "ServiceResult[TData]":
        """Wrap an exception caught while performing `operation`."""
        return cls.failure(
            ServiceError(
                code=code,
                message=f"Failed to {operation}: {exception}",
                severity=severity,
                details={"exception_type": type(exception).__name__},
            )
        )

    def __bool__(self) -> bool:
        return self.is_success

    def __repr__(self) -> str:
        status = "Success" if self.is_success else "Failure"
        return f"ServiceResult({status}: {self.message})" if self.message else f"ServiceResult({status})"


__all__ = [
    "ErrorCode",
    "ErrorSeverity",
    "ServiceError",
    "ServiceResult",
]
