# hostel_billing/services/common/__init__.py
"""
Shared service-layer infrastructure.

- **UnitOfWork**: Transaction boundary & repository factory with post-commit callbacks

Example usage:
    >>> from hostel_billing.services.common import UnitOfWork
    >>>
    >>> with UnitOfWork(session_factory) as uow:
    ...     ledger_repo = uow.get_repo(LedgerEntryRepository)
    ...     ledger_repo.append(entry)
"""
from __future__ import annotations

from .unit_of_work import UnitOfWork

__all__ = ["UnitOfWork"]
