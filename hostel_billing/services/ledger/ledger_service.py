"""
Ledger Service

Single authority for a student's ledger:
- Appending entries that move money in exactly one direction
- Computing the balance (debits minus credits over non-reversed entries)
- Listing and reversing entries

The service works inside the caller's session and never commits.
"""

from datetime import date
from typing import List, Optional

from sqlalchemy.orm import Session

from hostel_billing.core.exceptions import (
    InvalidLedgerEntryError,
    LedgerEntryAlreadyReversedError,
    LedgerEntryNotFoundError,
)
from hostel_billing.core.logging import get_logger
from hostel_billing.models.base.enums import BalanceType
from hostel_billing.models.ledger.ledger_entry import LedgerEntry
from hostel_billing.repositories.ledger.ledger_entry_repository import LedgerEntryRepository
from hostel_billing.schemas.ledger.ledger_entry import LedgerBalance, LedgerEntryCreate
from hostel_billing.utils.date_utils import now_utc
from hostel_billing.utils.money import ZERO, to_money


class LedgerService:
    """
    Service for ledger entries and balances.

    No other component aggregates ledger rows; every balance goes through
    `balance`.
    """

    def __init__(self, db_session: Session):
        """
        Initialize ledger service.

        Args:
            db_session: SQLAlchemy database session
        """
        self.db = db_session
        self.ledger_repo = LedgerEntryRepository(db_session)
        self._logger = get_logger(self.__class__.__name__)

    # ==================== Writes ====================

    def append_entry(self, data: LedgerEntryCreate) -> LedgerEntry:
        """
        Append a ledger entry with the next hostel sequence number.

        Raises:
            InvalidLedgerEntryError: If an amount is negative, or if not
                exactly one of debit and credit is positive
        """
        debit = to_money(data.debit)
        credit = to_money(data.credit)

        if debit < 0 or credit < 0:
            raise InvalidLedgerEntryError(
                "Ledger amounts cannot be negative",
                debit=debit,
                credit=credit,
            )
        if (debit > 0) == (credit > 0):
            raise InvalidLedgerEntryError(
                "Exactly one of debit or credit must be positive",
                debit=debit,
                credit=credit,
            )

        entry = self.ledger_repo.append(
            LedgerEntry(
                student_id=data.student_id,
                hostel_id=data.hostel_id,
                entry_date=data.entry_date,
                entry_type=data.entry_type,
                debit=debit,
                credit=credit,
                description=data.description,
                reference_id=data.reference_id,
                notes=data.notes,
                is_reversed=False,
            )
        )

        self._logger.info(
            f"Ledger entry appended: {entry.entry_type.value}",
            extra={
                "entry_id": entry.id,
                "student_id": entry.student_id,
                "hostel_id": entry.hostel_id,
                "entry_sequence": entry.entry_sequence,
                "debit": str(debit),
                "credit": str(credit),
            },
        )
        return entry

    def reverse_entry(
        self,
        entry_id: str,
        reason: str,
        reversed_by: Optional[str] = None,
    ) -> LedgerEntry:
        """
        Flag an entry as reversed so balances stop counting it.

        No compensating entry is written.

        Raises:
            LedgerEntryNotFoundError: If the entry does not exist
            LedgerEntryAlreadyReversedError: If it was already reversed
        """
        entry = self.ledger_repo.get_for_update(entry_id)
        if entry is None:
            raise LedgerEntryNotFoundError(entry_id)
        if entry.is_reversed:
            raise LedgerEntryAlreadyReversedError(entry_id)

        self.ledger_repo.mark_reversed(entry, reason, reversed_by, now_utc())

        self._logger.info(
            "Ledger entry reversed",
            extra={
                "entry_id": entry_id,
                "student_id": entry.student_id,
                "reversed_by": reversed_by,
                "reason": reason,
            },
        )
        return entry

    # ==================== Reads ====================

    def balance(self, student_id: str, as_of: Optional[date] = None) -> LedgerBalance:
        """
        Current balance of a student, or the balance as of a given day.

        A positive amount is owed by the student (Dr), a negative amount is
        credit held for the student (Cr), zero is Nil.
        """
        debits, credits, count = self.ledger_repo.sum_balance(student_id, as_of)
        amount = to_money(debits - credits)

        if amount > ZERO:
            direction = BalanceType.DEBIT
        elif amount < ZERO:
            direction = BalanceType.CREDIT
        else:
            direction = BalanceType.NIL

        return LedgerBalance(
            student_id=student_id,
            as_of=as_of,
            total_debits=debits,
            total_credits=credits,
            amount=amount,
            direction=direction,
            total_entries=count,
        )

    def list_entries(self, student_id: str, include_reversed: bool = True) -> List[LedgerEntry]:
        return self.ledger_repo.list_for_student(student_id, include_reversed=include_reversed)
