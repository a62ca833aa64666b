"""Ledger repositories."""

from hostel_billing.repositories.ledger.ledger_entry_repository import LedgerEntryRepository

__all__ = ["LedgerEntryRepository"]
