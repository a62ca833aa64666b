"""Ledger service layer."""

from hostel_billing.services.ledger.ledger_service import LedgerService

__all__ = ["LedgerService"]
