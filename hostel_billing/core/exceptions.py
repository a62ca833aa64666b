"""
Custom Exceptions for the Hostel Billing Engine

This module defines the exception classes raised by the billing services.
Every exception carries an error code, a message, structured details and the
HTTP status the API layer should answer with.
"""

from typing import Any, Dict, List, Optional
from enum import Enum


class ErrorCode(str, Enum):
    """Standard error codes for the application"""
    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    OPERATION_FAILED = "OPERATION_FAILED"

    # Validation errors
    VALIDATION_ERROR = "VALIDATION_ERROR"
    MISSING_REQUIRED_FIELD = "MISSING_REQUIRED_FIELD"
    CONSTRAINT_VIOLATION = "CONSTRAINT_VIOLATION"

    # Database errors
    DATABASE_ERROR = "DATABASE_ERROR"
    DUPLICATE_ENTRY = "DUPLICATE_ENTRY"
    TRANSACTION_FAILED = "TRANSACTION_FAILED"

    # Lookup errors
    STUDENT_NOT_FOUND = "STUDENT_NOT_FOUND"
    BED_NOT_FOUND = "BED_NOT_FOUND"
    LEDGER_ENTRY_NOT_FOUND = "LEDGER_ENTRY_NOT_FOUND"

    # Billing errors
    INVALID_DATE_RANGE = "INVALID_DATE_RANGE"
    MISSING_ENROLLMENT_DATE = "MISSING_ENROLLMENT_DATE"
    NO_ACTIVE_CONFIGURATION = "NO_ACTIVE_CONFIGURATION"
    INVALID_CONFIGURATION = "INVALID_CONFIGURATION"
    INVALID_LEDGER_ENTRY = "INVALID_LEDGER_ENTRY"
    LEDGER_ENTRY_ALREADY_REVERSED = "LEDGER_ENTRY_ALREADY_REVERSED"

    # Occupancy errors
    BED_UNAVAILABLE = "BED_UNAVAILABLE"
    SAME_BED = "SAME_BED"
    STUDENT_NOT_ACTIVE = "STUDENT_NOT_ACTIVE"
    NO_CURRENT_BED = "NO_CURRENT_BED"


class BaseAppException(Exception):
    """
    Base exception class for all application exceptions.

    Provides consistent error handling across the application with
    structured error information.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary format"""
        return {
            "error": {
                "message": self.message,
                "code": self.error_code.value,
                "details": self.details,
                "type": self.__class__.__name__
            }
        }

    def __str__(self) -> str:
        return f"{self.error_code.value}: {self.message}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message='{self.message}', error_code='{self.error_code.value}')"


# ========================================
# General Application Exceptions
# ========================================

class ValidationError(BaseAppException):
    """Exception raised when data validation fails"""

    def __init__(
        self,
        message: str = "Validation failed",
        field_errors: Optional[Dict[str, List[str]]] = None,
        error_code: ErrorCode = ErrorCode.VALIDATION_ERROR,
        status_code: int = 422
    ):
        details = {"field_errors": field_errors} if field_errors else {}
        super().__init__(message, error_code, details, status_code)


class ResourceNotFoundError(BaseAppException):
    """Exception raised when a requested resource is not found"""

    def __init__(
        self,
        resource_type: str = "Resource",
        resource_id: Optional[str] = None,
        message: Optional[str] = None
    ):
        if not message:
            message = f"{resource_type} not found"
            if resource_id:
                message += f" (ID: {resource_id})"

        details = {
            "resource_type": resource_type,
            "resource_id": resource_id
        }
        super().__init__(message, ErrorCode.RESOURCE_NOT_FOUND, details, 404)


class StudentNotFoundError(ResourceNotFoundError):
    """Exception raised when a student is not found"""

    def __init__(self, student_id: Optional[str] = None, message: Optional[str] = None):
        super().__init__("Student", student_id, message)
        self.error_code = ErrorCode.STUDENT_NOT_FOUND


class BedNotFoundError(ResourceNotFoundError):
    """Exception raised when a bed is not found"""

    def __init__(self, bed_id: Optional[str] = None, message: Optional[str] = None):
        super().__init__("Bed", bed_id, message)
        self.error_code = ErrorCode.BED_NOT_FOUND


class LedgerEntryNotFoundError(ResourceNotFoundError):
    """Exception raised when a ledger entry is not found"""

    def __init__(self, entry_id: Optional[str] = None, message: Optional[str] = None):
        super().__init__("Ledger entry", entry_id, message)
        self.error_code = ErrorCode.LEDGER_ENTRY_NOT_FOUND


# ========================================
# Database Exceptions
# ========================================

class DatabaseError(BaseAppException):
    """Exception raised when database operations fail"""

    def __init__(
        self,
        message: str = "Database operation failed",
        operation: Optional[str] = None,
        table: Optional[str] = None,
        error_code: ErrorCode = ErrorCode.DATABASE_ERROR,
        status_code: int = 500
    ):
        details = {
            "operation": operation,
            "table": table
        }
        super().__init__(message, error_code, details, status_code)


class RepositoryError(DatabaseError):
    """Exception raised when a repository operation fails"""

    def __init__(self, message: str = "Repository operation failed", table: Optional[str] = None):
        super().__init__(message, operation="repository", table=table)


class DuplicateEntryError(DatabaseError):
    """Exception raised when trying to create a duplicate entry"""

    def __init__(
        self,
        message: str = "Duplicate entry",
        field: Optional[str] = None,
        value: Optional[str] = None,
        table: Optional[str] = None
    ):
        super().__init__(message, table=table, error_code=ErrorCode.DUPLICATE_ENTRY, status_code=409)
        self.details.update({"field": field, "value": value})


class TransactionError(DatabaseError):
    """Raised when a database transaction fails to commit."""

    def __init__(self, message: str = "Transaction failed", original_error: Optional[Exception] = None):
        super().__init__(message, operation="commit", error_code=ErrorCode.TRANSACTION_FAILED)
        self.original_error = original_error
        if original_error is not None:
            self.details["error_type"] = type(original_error).__name__


# ========================================
# Billing Validation Exceptions
# ========================================

class InvalidDateRangeError(BaseAppException):
    """Exception raised when date range is invalid"""

    def __init__(
        self,
        message: str = "Invalid date range",
        start_date: Optional[str] = None,
        end_date: Optional[str] = None
    ):
        details = {
            "start_date": start_date,
            "end_date": end_date
        }
        super().__init__(message, ErrorCode.INVALID_DATE_RANGE, details, 422)


class MissingEnrollmentDateError(BaseAppException):
    """Exception raised when a student has no enrollment date"""

    def __init__(self, student_id: Optional[str] = None):
        super().__init__(
            "Student enrollment date is required for settlement",
            ErrorCode.MISSING_ENROLLMENT_DATE,
            {"student_id": student_id},
            422,
        )


class NoActiveConfigurationError(BaseAppException):
    """Exception raised when a student has no active fee components"""

    def __init__(self, student_id: Optional[str] = None):
        super().__init__(
            "No active financial configuration found for student",
            ErrorCode.NO_ACTIVE_CONFIGURATION,
            {"student_id": student_id},
            422,
        )


class InvalidConfigurationError(BaseAppException):
    """Exception raised when a fee or rate configuration value is invalid"""

    def __init__(
        self,
        message: str = "Invalid configuration value",
        config_key: Optional[str] = None,
        config_value: Optional[Any] = None
    ):
        details = {
            "config_key": config_key,
            "config_value": str(config_value) if config_value is not None else None
        }
        super().__init__(message, ErrorCode.INVALID_CONFIGURATION, details, 422)


class InvalidLedgerEntryError(BaseAppException):
    """Exception raised when a ledger entry does not move money in exactly one direction"""

    def __init__(self, message: str = "Invalid ledger entry", debit: Any = None, credit: Any = None):
        details = {
            "debit": str(debit) if debit is not None else None,
            "credit": str(credit) if credit is not None else None,
        }
        super().__init__(message, ErrorCode.INVALID_LEDGER_ENTRY, details, 422)


# ========================================
# Consistency Exceptions
# ========================================

class LedgerEntryAlreadyReversedError(BaseAppException):
    """Exception raised when reversing an entry twice"""

    def __init__(self, entry_id: Optional[str] = None):
        super().__init__(
            "Ledger entry is already reversed",
            ErrorCode.LEDGER_ENTRY_ALREADY_REVERSED,
            {"entry_id": entry_id},
            409,
        )


class BedSwitchError(BaseAppException):
    """Base class for rejected bed switch preconditions"""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode,
        student_id: Optional[str] = None,
        bed_id: Optional[str] = None,
        status_code: int = 409
    ):
        details = {
            "student_id": student_id,
            "bed_id": bed_id
        }
        super().__init__(message, error_code, details, status_code)


class BedUnavailableError(BedSwitchError):
    """Exception raised when the target bed cannot be occupied"""

    def __init__(self, bed_id: Optional[str] = None, status: Optional[str] = None):
        super().__init__("Target bed is not available", ErrorCode.BED_UNAVAILABLE, bed_id=bed_id)
        if status:
            self.details["status"] = status


class SameBedError(BedSwitchError):
    """Exception raised when the student already occupies the requested bed"""

    def __init__(self, student_id: Optional[str] = None, bed_id: Optional[str] = None):
        super().__init__("Student already occupies the requested bed", ErrorCode.SAME_BED, student_id, bed_id)


class StudentNotActiveError(BedSwitchError):
    """Exception raised when the student is not active"""

    def __init__(self, student_id: Optional[str] = None, status: Optional[str] = None):
        super().__init__("Student is not active", ErrorCode.STUDENT_NOT_ACTIVE, student_id)
        if status:
            self.details["status"] = status


class NoCurrentBedError(BedSwitchError):
    """Exception raised when the student has no bed to switch from"""

    def __init__(self, student_id: Optional[str] = None):
        super().__init__("Student has no current bed assignment", ErrorCode.NO_CURRENT_BED, student_id)


__all__ = [
    'ErrorCode',
    'BaseAppException',
    'ValidationError',
    'ResourceNotFoundError',
    'StudentNotFoundError',
    'BedNotFoundError',
    'LedgerEntryNotFoundError',
    'DatabaseError',
    'RepositoryError',
    'DuplicateEntryError',
    'TransactionError',
    'InvalidDateRangeError',
    'MissingEnrollmentDateError',
    'NoActiveConfigurationError',
    'InvalidConfigurationError',
    'InvalidLedgerEntryError',
    'LedgerEntryAlreadyReversedError',
    'BedSwitchError',
    'BedUnavailableError',
    'SameBedError',
    'StudentNotActiveError',
    'NoCurrentBedError',
]
