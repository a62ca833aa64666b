"""
Database enums shared by models and schemas.

Provides SQLAlchemy-compatible enum definitions that the Pydantic
schemas reuse for consistency.
"""

import enum


class StudentStatus(str, enum.Enum):
    """Student lifecycle status."""
    ACTIVE = "active"
    INACTIVE = "inactive"
    CHECKED_OUT = "checked_out"


class BedStatus(str, enum.Enum):
    """Bed availability status."""
    AVAILABLE = "available"
    OCCUPIED = "occupied"
    RESERVED = "reserved"
    MAINTENANCE = "maintenance"


class OccupancyStatus(str, enum.Enum):
    """Room occupancy record status."""
    ACTIVE = "active"
    TRANSFERRED = "transferred"
    CHECKED_OUT = "checked_out"


class FeeType(str, enum.Enum):
    """Recurring fee component categories."""
    BASE_MONTHLY = "base_monthly"
    LAUNDRY = "laundry"
    FOOD = "food"
    UTILITIES = "utilities"
    MAINTENANCE = "maintenance"
    ADDITIONAL = "additional"


class PaymentStatus(str, enum.Enum):
    """Payment processing status."""
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"


class PaymentType(str, enum.Enum):
    """Payment type categorization."""
    ADVANCE = "advance"
    REGULAR = "regular"
    REFUND = "refund"
    SETTLEMENT = "settlement"


class PaymentMethod(str, enum.Enum):
    """Payment method types."""
    CASH = "cash"
    CARD = "card"
    BANK_TRANSFER = "bank_transfer"
    UPI = "upi"
    CHEQUE = "cheque"
    ONLINE = "online"


class LedgerEntryType(str, enum.Enum):
    """Ledger entry type."""
    INVOICE = "invoice"
    PAYMENT = "payment"
    ADJUSTMENT = "adjustment"
    REFUND = "refund"


class BalanceType(str, enum.Enum):
    """Direction of a ledger balance."""
    DEBIT = "Dr"
    CREDIT = "Cr"
    NIL = "Nil"


class SettlementType(str, enum.Enum):
    """Outcome of a checkout settlement."""
    BALANCED = "balanced"
    REFUND = "refund"
    ADDITIONAL_PAYMENT = "additional_payment"
