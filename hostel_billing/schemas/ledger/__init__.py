"""Ledger schemas."""

from hostel_billing.schemas.ledger.ledger_entry import (
    LedgerBalance,
    LedgerEntryCreate,
    LedgerEntryResponse,
    LedgerReversalRequest,
)

__all__ = [
    "LedgerBalance",
    "LedgerEntryCreate",
    "LedgerEntryResponse",
    "LedgerReversalRequest",
]
