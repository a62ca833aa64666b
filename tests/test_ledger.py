"""Ledger entries, balances and reversal"""
from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy.exc import IntegrityError

from hostel_billing.core.exceptions import (
    InvalidLedgerEntryError,
    LedgerEntryAlreadyReversedError,
    LedgerEntryNotFoundError,
)
from hostel_billing.models.base.enums import BalanceType, LedgerEntryType
from hostel_billing.models.ledger.ledger_entry import LedgerEntry
from hostel_billing.schemas.ledger.ledger_entry import LedgerEntryCreate
from hostel_billing.services.ledger.ledger_service import LedgerService

from tests.conftest import HOSTEL_ID


def entry(student_id, debit="0", credit="0", entry_date=date(2024, 1, 31), hostel_id=HOSTEL_ID):
    return LedgerEntryCreate(
        student_id=student_id,
        hostel_id=hostel_id,
        entry_date=entry_date,
        entry_type=LedgerEntryType.INVOICE if Decimal(debit) > 0 else LedgerEntryType.PAYMENT,
        debit=Decimal(debit),
        credit=Decimal(credit),
        description="test entry",
    )


class TestAppendEntry:

    def test_debit_entry(self, db, seed):
        sid = seed.student()
        created = LedgerService(db).append_entry(entry(sid, debit="15000"))
        db.commit()
        assert created.debit == Decimal("15000.00")
        assert created.credit == Decimal("0.00")
        assert created.entry_sequence == 1
        assert created.is_reversed is False

    @pytest.mark.parametrize("debit,credit", [("0", "0"), ("10", "10"), ("-5", "0"), ("0", "-5")])
    def test_rejects_invalid_direction(self, db, seed, debit, credit):
        sid = seed.student()
        with pytest.raises(InvalidLedgerEntryError):
            LedgerService(db).append_entry(entry(sid, debit=debit, credit=credit))

    def test_check_constraint_enforced_by_database(self, db, seed):
        sid = seed.student()
        db.add(
            LedgerEntry(
                student_id=sid,
                hostel_id=HOSTEL_ID,
                entry_date=date(2024, 1, 1),
                entry_type=LedgerEntryType.ADJUSTMENT,
                debit=Decimal("10"),
                credit=Decimal("10"),
                description="both sides",
                entry_sequence=99,
            )
        )
        with pytest.raises(IntegrityError):
            db.flush()
        db.rollback()

    def test_sequence_is_monotonic_per_hostel(self, db, seed):
        first = seed.student()
        second = seed.student(name="Bikash Thapa")
        other = seed.student(name="Chandra Gurung", hostel_id="hostel-2")
        service = LedgerService(db)

        sequences = [
            service.append_entry(entry(first, debit="100")).entry_sequence,
            service.append_entry(entry(second, debit="100")).entry_sequence,
            service.append_entry(entry(first, credit="50")).entry_sequence,
        ]
        other_seq = service.append_entry(entry(other, debit="1", hostel_id="hostel-2")).entry_sequence
        db.commit()

        assert sequences == [1, 2, 3]
        assert other_seq == 1


class TestBalance:

    def test_debit_balance(self, db, seed):
        sid = seed.student()
        service = LedgerService(db)
        service.append_entry(entry(sid, debit="15000"))
        service.append_entry(entry(sid, credit="10000"))
        db.commit()

        balance = service.balance(sid)
        assert balance.amount == Decimal("5000.00")
        assert balance.direction == BalanceType.DEBIT
        assert balance.total_debits == Decimal("15000.00")
        assert balance.total_credits == Decimal("10000.00")
        assert balance.total_entries == 2

    def test_credit_balance(self, db, seed):
        sid = seed.student()
        service = LedgerService(db)
        service.append_entry(entry(sid, credit="3000"))
        db.commit()

        balance = service.balance(sid)
        assert balance.amount == Decimal("-3000.00")
        assert balance.direction == BalanceType.CREDIT
        assert balance.absolute_amount == Decimal("3000.00")

    def test_empty_ledger_is_nil(self, db, seed):
        sid = seed.student()
        balance = LedgerService(db).balance(sid)
        assert balance.amount == Decimal("0.00")
        assert balance.direction == BalanceType.NIL
        assert balance.total_entries == 0

    def test_as_of_excludes_later_entries(self, db, seed):
        sid = seed.student()
        service = LedgerService(db)
        service.append_entry(entry(sid, debit="1000", entry_date=date(2024, 1, 31)))
        service.append_entry(entry(sid, debit="2000", entry_date=date(2024, 2, 29)))
        db.commit()

        assert service.balance(sid, as_of=date(2024, 2, 1)).amount == Decimal("1000.00")
        assert service.balance(sid).amount == Decimal("3000.00")


class TestReversal:

    def test_reversed_entry_leaves_balance(self, db, seed):
        sid = seed.student()
        service = LedgerService(db)
        keep = service.append_entry(entry(sid, debit="1000"))
        wrong = service.append_entry(entry(sid, debit="700"))
        db.commit()

        service.reverse_entry(wrong.id, "Posted twice", reversed_by="accountant")
        db.commit()

        reversed_entry = db.get(LedgerEntry, wrong.id)
        assert reversed_entry.is_reversed
        assert reversed_entry.reversal_reason == "Posted twice"
        assert reversed_entry.reversed_by == "accountant"
        assert reversed_entry.reversal_date is not None

        assert service.balance(sid).amount == Decimal("1000.00")
        # Still on record
        assert len(service.list_entries(sid)) == 2
        assert [e.id for e in service.list_entries(sid, include_reversed=False)] == [keep.id]

    def test_reverse_twice(self, db, seed):
        sid = seed.student()
        service = LedgerService(db)
        created = service.append_entry(entry(sid, debit="10"))
        service.reverse_entry(created.id, "mistake")
        with pytest.raises(LedgerEntryAlreadyReversedError):
            service.reverse_entry(created.id, "mistake again")

    def test_reverse_unknown(self, db):
        with pytest.raises(LedgerEntryNotFoundError):
            LedgerService(db).reverse_entry("nope", "missing")
