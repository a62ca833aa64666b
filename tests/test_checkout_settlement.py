"""Checkout settlement calculation and processing"""
from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy import select

from hostel_billing.core.exceptions import (
    InvalidDateRangeError,
    MissingEnrollmentDateError,
    NoActiveConfigurationError,
    StudentNotFoundError,
)
from hostel_billing.core.locking import KeyedLock
from hostel_billing.models.base.enums import (
    BalanceType,
    LedgerEntryType,
    PaymentStatus,
    PaymentType,
    SettlementType,
)
from hostel_billing.models.ledger.ledger_entry import LedgerEntry
from hostel_billing.models.payment.payment import Payment
from hostel_billing.services.base.notification_dispatcher import BillingEvent, NotificationDispatcher
from hostel_billing.services.billing.checkout_settlement_service import CheckoutSettlementService
from hostel_billing.services.ledger.ledger_service import LedgerService

CHECKOUT = date(2024, 3, 10)


@pytest.fixture
def service(session_factory, notifier):
    return CheckoutSettlementService(session_factory, notifier=notifier, locks=KeyedLock())


@pytest.fixture
def student(seed):
    """Enrolled 2024-01-15 at 15000/month."""
    sid = seed.student(enrollment_date=date(2024, 1, 15))
    seed.fee(sid, "15000")
    return sid


def payments_of(db, student_id):
    return db.scalars(select(Payment).where(Payment.student_id == student_id)).all()


def entries_of(db, student_id):
    return db.scalars(select(LedgerEntry).where(LedgerEntry.student_id == student_id)).all()


class TestCalculateSettlement:

    def test_refund_due(self, service, seed, student):
        seed.payment(student, "15000", date(2024, 1, 15))
        seed.payment(student, "15000", date(2024, 2, 15))

        settlement = service.calculate_settlement(student, CHECKOUT)

        assert settlement.total_payments_made == Decimal("30000.00")
        assert settlement.total_actual_usage == Decimal("28064.52")
        assert settlement.total_days_stayed == 56
        assert settlement.monthly_fee == Decimal("15000.00")
        assert settlement.net_settlement == Decimal("1935.48")
        assert settlement.refund_due == Decimal("1935.48")
        assert settlement.additional_due == Decimal("0.00")
        assert settlement.settlement_summary.settlement_type == SettlementType.REFUND
        assert settlement.settlement_summary.settlement_amount == Decimal("1935.48")
        assert settlement.settlement_summary.is_refund_due
        assert not settlement.settlement_summary.is_additional_payment_due
        assert [p.amount for p in settlement.payment_breakdown] == [Decimal("15000.00"), Decimal("15000.00")]
        assert len(settlement.usage_breakdown) == 3

    def test_additional_payment_due(self, service, seed, student):
        seed.payment(student, "20000")

        settlement = service.calculate_settlement(student, CHECKOUT)

        assert settlement.net_settlement == Decimal("-8064.52")
        assert settlement.additional_due == Decimal("8064.52")
        assert settlement.refund_due == Decimal("0.00")
        assert settlement.settlement_summary.settlement_type == SettlementType.ADDITIONAL_PAYMENT
        assert settlement.settlement_summary.settlement_amount == Decimal("8064.52")

    def test_balanced(self, service, seed, student):
        seed.payment(student, "28064.52")

        summary = service.calculate_settlement(student, CHECKOUT).settlement_summary

        assert summary.settlement_type == SettlementType.BALANCED
        assert summary.settlement_amount == Decimal("0.00")
        assert not summary.is_refund_due
        assert not summary.is_additional_payment_due

    @pytest.mark.parametrize("paid", ["0.01", "10000", "28064.51", "28064.53", "50000"])
    def test_exactly_one_outcome(self, service, seed, student, paid):
        seed.payment(student, paid)
        settlement = service.calculate_settlement(student, CHECKOUT)
        summary = settlement.settlement_summary

        assert not (summary.is_refund_due and summary.is_additional_payment_due)
        assert min(settlement.refund_due, settlement.additional_due) == Decimal("0.00")
        if summary.settlement_type == SettlementType.REFUND:
            assert settlement.refund_due > 0
        else:
            assert summary.settlement_type == SettlementType.ADDITIONAL_PAYMENT
            assert settlement.additional_due > 0

    def test_only_completed_payments_count(self, service, seed, student):
        seed.payment(student, "10000")
        seed.payment(student, "5000", status=PaymentStatus.PENDING)
        seed.payment(student, "5000", status=PaymentStatus.FAILED)

        settlement = service.calculate_settlement(student, CHECKOUT)
        assert settlement.total_payments_made == Decimal("10000.00")

    def test_does_not_write(self, service, db, seed, student):
        seed.payment(student, "30000")
        first = service.calculate_settlement(student, CHECKOUT)
        second = service.calculate_settlement(student, CHECKOUT)

        assert first == second
        assert len(payments_of(db, student)) == 1
        assert entries_of(db, student) == []

    def test_checkout_before_enrollment(self, service, db, seed):
        sid = seed.student(enrollment_date=date(2024, 3, 10))
        seed.fee(sid, "15000")

        with pytest.raises(InvalidDateRangeError):
            service.calculate_settlement(sid, date(2024, 3, 5))
        with pytest.raises(InvalidDateRangeError):
            service.process_settlement(sid, date(2024, 3, 5))

        assert payments_of(db, sid) == []
        assert entries_of(db, sid) == []

    def test_checkout_on_enrollment_day(self, service, student):
        with pytest.raises(InvalidDateRangeError):
            service.calculate_settlement(student, date(2024, 1, 15))

    def test_missing_enrollment_date(self, service, seed):
        sid = seed.student(enrollment_date=None)
        with pytest.raises(MissingEnrollmentDateError):
            service.calculate_settlement(sid, CHECKOUT)

    def test_unknown_student(self, service):
        with pytest.raises(StudentNotFoundError):
            service.calculate_settlement("missing", CHECKOUT)

    def test_no_fee_configuration(self, service, seed):
        sid = seed.student()
        with pytest.raises(NoActiveConfigurationError):
            service.calculate_settlement(sid, CHECKOUT)


class TestProcessSettlement:

    def test_refund_records_payment_and_credit(self, service, db, seed, student, notifier):
        seed.payment(student, "30000")

        result = service.process_settlement(student, CHECKOUT)

        assert result.success
        assert result.settlement.settlement_summary.settlement_type == SettlementType.REFUND

        refund = db.get(Payment, result.payment_id)
        assert refund.payment_type == PaymentType.REFUND
        assert refund.status == PaymentStatus.COMPLETED
        assert refund.amount == Decimal("1935.48")
        assert refund.payment_date == CHECKOUT
        assert refund.processed_by == "checkout_settlement_system"
        assert refund.notes == "Checkout refund - 56 days usage"

        adjustment = db.get(LedgerEntry, result.ledger_entry_id)
        assert adjustment.entry_type == LedgerEntryType.ADJUSTMENT
        assert adjustment.credit == Decimal("1935.48")
        assert adjustment.debit == Decimal("0.00")
        assert adjustment.reference_id == refund.id

        balance = LedgerService(db).balance(student)
        assert balance.direction == BalanceType.CREDIT
        assert balance.amount == Decimal("-1935.48")

        assert [n.event_type for n in notifier.sent] == [BillingEvent.SETTLEMENT_PROCESSED]

    def test_additional_records_payment_and_debit(self, service, db, seed, student):
        seed.payment(student, "20000")

        result = service.process_settlement(student, CHECKOUT, notes="Collected at desk")

        payment = db.get(Payment, result.payment_id)
        assert payment.payment_type == PaymentType.SETTLEMENT
        assert payment.amount == Decimal("8064.52")
        assert payment.notes == "Collected at desk"

        adjustment = db.get(LedgerEntry, result.ledger_entry_id)
        assert adjustment.debit == Decimal("8064.52")
        assert adjustment.credit == Decimal("0.00")

    def test_balanced_writes_nothing(self, service, db, seed, student):
        seed.payment(student, "28064.52")

        result = service.process_settlement(student, CHECKOUT)

        assert result.success
        assert result.payment_id is None
        assert result.ledger_entry_id is None
        assert "balanced" in result.message
        assert len(payments_of(db, student)) == 1
        assert entries_of(db, student) == []

    def test_ledger_failure_rolls_back_payment(self, service, db, seed, student, notifier, monkeypatch):
        seed.payment(student, "30000")

        def broken_append(self, data):
            raise RuntimeError("ledger unavailable")

        monkeypatch.setattr(LedgerService, "append_entry", broken_append)

        with pytest.raises(RuntimeError):
            service.process_settlement(student, CHECKOUT)

        db.expire_all()
        assert [p.payment_type for p in payments_of(db, student)] == [PaymentType.REGULAR]
        assert entries_of(db, student) == []
        assert notifier.sent == []

    def test_notification_failure_does_not_undo_settlement(self, session_factory, db, seed, student):
        def failing_sender(notification):
            raise ConnectionError("mail server down")

        service = CheckoutSettlementService(
            session_factory,
            notifier=NotificationDispatcher(sender=failing_sender, enabled=True),
            locks=KeyedLock(),
        )
        seed.payment(student, "30000")

        result = service.process_settlement(student, CHECKOUT)

        assert result.success
        assert db.get(Payment, result.payment_id) is not None
        assert db.get(LedgerEntry, result.ledger_entry_id) is not None

    def test_lock_released_after_processing(self, session_factory, seed, student):
        locks = KeyedLock()
        service = CheckoutSettlementService(session_factory, locks=locks)
        seed.payment(student, "30000")

        service.process_settlement(student, CHECKOUT)
        assert locks.active_keys() == 0

    def test_settled_refund_is_not_paid_twice(self, service, db, seed, student):
        seed.payment(student, "30000")
        first = service.process_settlement(student, CHECKOUT)
        assert first.settlement.refund_due == Decimal("1935.48")

        preview = service.calculate_settlement(student, CHECKOUT)
        assert preview.total_payments_made == Decimal("28064.52")
        assert preview.settlement_summary.settlement_type == SettlementType.BALANCED
        assert preview.refund_due == Decimal("0")

        second = service.process_settlement(student, CHECKOUT)
        assert second.payment_id is None
        assert [p.payment_type for p in payments_of(db, student)].count(PaymentType.REFUND) == 1
        assert LedgerService(db).balance(student).amount == Decimal("-1935.48")

    def test_settled_additional_payment_balances(self, service, seed, student):
        seed.payment(student, "20000")
        service.process_settlement(student, CHECKOUT)

        preview = service.calculate_settlement(student, CHECKOUT)
        assert preview.total_payments_made == Decimal("28064.52")
        assert preview.settlement_summary.settlement_type == SettlementType.BALANCED


class TestValidateSettlement:

    def test_valid(self, service, seed, student):
        seed.payment(student, "30000")
        validation = service.validate_settlement(student, CHECKOUT)
        assert validation.is_valid
        assert validation.issues == []
        assert validation.settlement is not None

    def test_no_payments(self, service, student):
        validation = service.validate_settlement(student, CHECKOUT)
        assert not validation.is_valid
        assert "No payments found for student" in validation.issues

    def test_calculation_error_becomes_issue(self, service, student):
        validation = service.validate_settlement(student, date(2024, 1, 1))
        assert not validation.is_valid
        assert validation.settlement is None
        assert validation.issues[0].startswith("Settlement calculation failed:")
