"""Ledger models."""

from hostel_billing.models.ledger.ledger_entry import LedgerEntry, LedgerSequence

__all__ = ["LedgerEntry", "LedgerSequence"]
