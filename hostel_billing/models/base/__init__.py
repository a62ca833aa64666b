"""
Base models package.

Provides the declarative base, abstract base classes and enums
for all database models.
"""

from hostel_billing.models.base.base_model import (
    Base,
    BaseModel,
    TimestampModel,
)

from hostel_billing.models.base.enums import (
    BalanceType,
    BedStatus,
    FeeType,
    LedgerEntryType,
    OccupancyStatus,
    PaymentMethod,
    PaymentStatus,
    PaymentType,
    SettlementType,
    StudentStatus,
)

__all__ = [
    "Base",
    "BaseModel",
    "TimestampModel",
    "BalanceType",
    "BedStatus",
    "FeeType",
    "LedgerEntryType",
    "OccupancyStatus",
    "PaymentMethod",
    "PaymentStatus",
    "PaymentType",
    "SettlementType",
    "StudentStatus",
]
