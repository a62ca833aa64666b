"""
Ledger Entry Repository.

Append-only storage for student ledger entries, per-hostel sequence
numbering and the balance aggregate.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from hostel_billing.core.exceptions import RepositoryError
from hostel_billing.models.ledger.ledger_entry import LedgerEntry, LedgerSequence
from hostel_billing.repositories.base.base_repository import BaseRepository
from hostel_billing.utils.money import to_money


class LedgerEntryRepository(BaseRepository[LedgerEntry]):
    """Repository for ledger entry operations."""

    def __init__(self, db: Session):
        super().__init__(LedgerEntry, db)

    # ==================== Core Ledger Operations ====================

    def next_sequence(self, hostel_id: str) -> int:
        """
        Issue the next entry sequence for a hostel.

        The counter row stays locked until the surrounding transaction ends.
        """
        stmt = (
            select(LedgerSequence)
            .where(LedgerSequence.hostel_id == hostel_id)
            .with_for_update()
        )
        try:
            counter = self.db.execute(stmt).scalar_one_or_none()
            if counter is None:
                counter = LedgerSequence(hostel_id=hostel_id, last_value=0)
                self.db.add(counter)
            counter.last_value += 1
            self.db.flush()
        except SQLAlchemyError as e:
            raise RepositoryError(f"Sequence allocation failed: {str(e)}", table="ledger_sequences") from e
        return counter.last_value

    def append(self, entry: LedgerEntry) -> LedgerEntry:
        entry.entry_sequence = self.next_sequence(entry.hostel_id)
        return self.create(entry)

    def sum_balance(
        self,
        student_id: str,
        as_of: Optional[date] = None,
    ) -> Tuple[Decimal, Decimal, int]:
        """
        Aggregate non-reversed entries for a student.

        Returns:
            (total debits, total credits, entry count)
        """
        query = select(
            func.coalesce(func.sum(LedgerEntry.debit), 0),
            func.coalesce(func.sum(LedgerEntry.credit), 0),
            func.count(LedgerEntry.id),
        ).where(
            LedgerEntry.student_id == student_id,
            LedgerEntry.is_reversed.is_(False),
        )
        if as_of is not None:
            query = query.where(LedgerEntry.entry_date <= as_of)

        try:
            debits, credits, count = self.db.execute(query).one()
        except SQLAlchemyError as e:
            raise RepositoryError(f"Balance query failed: {str(e)}", table="ledger_entries") from e

        return to_money(debits), to_money(credits), int(count or 0)

    def list_for_student(
        self,
        student_id: str,
        include_reversed: bool = True,
    ) -> List[LedgerEntry]:
        criteria = [LedgerEntry.student_id == student_id]
        if not include_reversed:
            criteria.append(LedgerEntry.is_reversed.is_(False))
        return self.list_by(
            *criteria,
            order_by=(LedgerEntry.entry_date, LedgerEntry.entry_sequence),
        )

    def mark_reversed(
        self,
        entry: LedgerEntry,
        reason: str,
        reversed_by: Optional[str],
        reversed_at: datetime,
    ) -> LedgerEntry:
        entry.is_reversed = True
        entry.reversal_reason = reason
        entry.reversed_by = reversed_by
        entry.reversal_date = reversed_at
        self.flush()
        return entry
