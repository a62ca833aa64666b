"""
Checkout Settlement Service

Reconciles what a student paid against what they actually used at checkout:
- Prorated usage from enrollment to checkout, month by month
- Completed payments received
- Classification into refund, additional payment or balanced
- Recording the refund or collection as a payment plus a ledger adjustment

Recording a settlement runs in one unit of work and is serialized per
student. Notifications go out only after the commit.
"""

from datetime import date
from decimal import Decimal
from typing import Callable, List, Optional

from sqlalchemy.orm import Session

from hostel_billing.config.settings import settings
from hostel_billing.core.exceptions import (
    BaseAppException,
    InvalidDateRangeError,
    MissingEnrollmentDateError,
    StudentNotFoundError,
)
from hostel_billing.core.locking import KeyedLock, student_locks
from hostel_billing.core.logging import get_logger, log_context
from hostel_billing.models.base.enums import (
    LedgerEntryType,
    PaymentMethod,
    PaymentStatus,
    PaymentType,
    SettlementType,
)
from hostel_billing.models.payment.payment import Payment
from hostel_billing.models.student.student import Student
from hostel_billing.repositories.payment.payment_repository import PaymentRepository
from hostel_billing.repositories.student.student_repository import StudentRepository
from hostel_billing.schemas.billing.settlement import (
    CheckoutSettlement,
    PaymentBreakdownItem,
    SettlementResult,
    SettlementSummary,
    SettlementValidation,
)
from hostel_billing.schemas.ledger.ledger_entry import LedgerEntryCreate
from hostel_billing.services.base.notification_dispatcher import (
    BillingEvent,
    NotificationDispatcher,
    NotificationPriority,
)
from hostel_billing.services.common import UnitOfWork
from hostel_billing.services.fee_structure.fee_configuration_service import FeeConfigurationService
from hostel_billing.services.fee_structure.proration_service import ProrationService
from hostel_billing.services.ledger.ledger_service import LedgerService
from hostel_billing.utils.money import ZERO, is_negligible, sum_money, to_money


class CheckoutSettlementService:
    """
    Service for checkout settlement calculation and processing.

    `calculate_settlement` never writes. `process_settlement` recalculates
    under the student's lock and records the outcome atomically.
    """

    def __init__(
        self,
        session_factory: Callable[[], Session],
        notifier: Optional[NotificationDispatcher] = None,
        locks: KeyedLock = student_locks,
    ):
        """
        Initialize checkout settlement service.

        Args:
            session_factory: Factory returning new SQLAlchemy sessions
            notifier: Dispatcher for post-commit settlement notifications
            locks: Per-student lock registry
        """
        self._session_factory = session_factory
        self._notifier = notifier or NotificationDispatcher()
        self._locks = locks
        self._proration = ProrationService()
        self._logger = get_logger(self.__class__.__name__)

    # -------------------------------------------------------------------------
    # Calculation
    # -------------------------------------------------------------------------

    def calculate_settlement(self, student_id: str, checkout_date: date) -> CheckoutSettlement:
        """
        Compute the settlement a checkout on `checkout_date` would produce.

        Raises:
            StudentNotFoundError: If the student does not exist
            MissingEnrollmentDateError: If the student has no enrollment date
            InvalidDateRangeError: If checkout is not after enrollment
            NoActiveConfigurationError: If the student has no fee components
        """
        with UnitOfWork(self._session_factory, auto_commit=False) as uow:
            student = uow.get_repo(StudentRepository).find_by_id(student_id)
            if student is None:
                raise StudentNotFoundError(student_id)
            return self._calculate(uow.session, student, checkout_date)

    def validate_settlement(self, student_id: str, checkout_date: date) -> SettlementValidation:
        """
        Sanity-check a settlement before checkout.

        Calculation errors are reported as issues rather than raised.
        """
        issues: List[str] = []

        try:
            settlement = self.calculate_settlement(student_id, checkout_date)
        except BaseAppException as e:
            issues.append(f"Settlement calculation failed: {e.message}")
            return SettlementValidation(is_valid=False, issues=issues, settlement=None)

        if settlement.total_payments_made <= 0:
            issues.append("No payments found for student")
        if settlement.total_actual_usage <= 0:
            issues.append("Invalid usage calculation - amount must be positive")
        if settlement.total_days_stayed <= 0:
            issues.append("Invalid days calculation - must be positive")
        if settlement.refund_due > settlement.total_payments_made:
            issues.append("Refund amount exceeds total payments made")

        return SettlementValidation(
            is_valid=not issues,
            issues=issues,
            settlement=settlement,
        )

    # -------------------------------------------------------------------------
    # Processing
    # -------------------------------------------------------------------------

    def process_settlement(
        self,
        student_id: str,
        checkout_date: date,
        notes: Optional[str] = None,
    ) -> SettlementResult:
        """
        Record the settlement for a checkout.

        REFUND writes a refund payment and a ledger credit; ADDITIONAL_PAYMENT
        writes a settlement payment and a ledger debit; BALANCED writes
        nothing. Either every record is committed or none is.

        Raises:
            Any error from `calculate_settlement`, or TransactionError if the
            commit fails
        """
        with self._locks.hold(student_id), log_context(student_id):
            with UnitOfWork(self._session_factory) as uow:
                student = uow.get_repo(StudentRepository).get_for_update(student_id)
                if student is None:
                    raise StudentNotFoundError(student_id)

                settlement = self._calculate(uow.session, student, checkout_date)
                settlement_type = settlement.settlement_summary.settlement_type

                payment_id = None
                ledger_entry_id = None

                if settlement_type == SettlementType.REFUND:
                    payment = self._record_payment(
                        uow,
                        student,
                        PaymentType.REFUND,
                        settlement.refund_due,
                        checkout_date,
                        notes or f"Checkout refund - {settlement.total_days_stayed} days usage",
                    )
                    entry = LedgerService(uow.session).append_entry(
                        LedgerEntryCreate(
                            student_id=student.id,
                            hostel_id=student.hostel_id,
                            entry_date=checkout_date,
                            entry_type=LedgerEntryType.ADJUSTMENT,
                            credit=settlement.refund_due,
                            description=f"Checkout refund - {student.name} - Actual usage settlement",
                            reference_id=payment.id,
                        )
                    )
                    payment_id, ledger_entry_id = payment.id, entry.id
                    message = (
                        f"Refund of {settings.CURRENCY} {settlement.refund_due:,} "
                        f"processed for checkout settlement"
                    )

                elif settlement_type == SettlementType.ADDITIONAL_PAYMENT:
                    payment = self._record_payment(
                        uow,
                        student,
                        PaymentType.SETTLEMENT,
                        settlement.additional_due,
                        checkout_date,
                        notes or (
                            f"Additional payment for checkout settlement - "
                            f"{settlement.total_days_stayed} days usage"
                        ),
                    )
                    entry = LedgerService(uow.session).append_entry(
                        LedgerEntryCreate(
                            student_id=student.id,
                            hostel_id=student.hostel_id,
                            entry_date=checkout_date,
                            entry_type=LedgerEntryType.ADJUSTMENT,
                            debit=settlement.additional_due,
                            description=f"Additional payment - {student.name} - Checkout settlement",
                            reference_id=payment.id,
                        )
                    )
                    payment_id, ledger_entry_id = payment.id, entry.id
                    message = (
                        f"Additional payment of {settings.CURRENCY} {settlement.additional_due:,} "
                        f"recorded for checkout settlement"
                    )

                else:
                    message = "Checkout settlement balanced - no additional payment or refund required"

                result = SettlementResult(
                    success=True,
                    settlement=settlement,
                    payment_id=payment_id,
                    ledger_entry_id=ledger_entry_id,
                    message=message,
                )
                uow.on_commit(lambda: self._notify(result))

        self._logger.info(
            f"Checkout settlement processed: {settlement_type.value}",
            extra={
                "student_id": student_id,
                "settlement_type": settlement_type.value,
                "settlement_amount": str(settlement.settlement_summary.settlement_amount),
                "payment_id": payment_id,
                "ledger_entry_id": ledger_entry_id,
            },
        )
        return result

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _calculate(self, session: Session, student: Student, checkout_date: date) -> CheckoutSettlement:
        if student.enrollment_date is None:
            raise MissingEnrollmentDateError(student.id)

        enrollment_date = student.enrollment_date
        if checkout_date <= enrollment_date:
            raise InvalidDateRangeError(
                "Checkout date must be after enrollment date",
                start_date=enrollment_date.isoformat(),
                end_date=checkout_date.isoformat(),
            )

        payments = PaymentRepository(session).list_completed(student.id)
        payment_breakdown = [
            PaymentBreakdownItem(
                payment_id=payment.id,
                payment_type=payment.payment_type,
                amount=to_money(payment.amount),
                payment_date=payment.payment_date,
                month_covered=payment.month_covered,
            )
            for payment in payments
        ]
        # Refunds are money paid back out, so they reduce what has been paid in.
        paid_in = sum_money(
            item.amount for item in payment_breakdown if item.payment_type != PaymentType.REFUND
        )
        refunded = sum_money(
            item.amount for item in payment_breakdown if item.payment_type == PaymentType.REFUND
        )
        total_payments = to_money(paid_in - refunded)

        monthly_fee = FeeConfigurationService(session).resolve_monthly_fee(student.id).total_monthly_fee

        usage = self._proration.compute_usage(enrollment_date, checkout_date, monthly_fee)
        total_usage = self._proration.total_amount(usage)
        total_days = self._proration.total_days(usage)

        net = to_money(total_payments - total_usage)
        summary = self._classify(net)

        if summary.settlement_type == SettlementType.BALANCED:
            refund_due = additional_due = ZERO
        else:
            refund_due = max(ZERO, net)
            additional_due = max(ZERO, -net)

        return CheckoutSettlement(
            student_id=student.id,
            student_name=student.name,
            hostel_id=student.hostel_id,
            enrollment_date=enrollment_date,
            checkout_date=checkout_date,
            monthly_fee=monthly_fee,
            total_days_stayed=total_days,
            total_payments_made=total_payments,
            total_actual_usage=total_usage,
            refund_due=refund_due,
            additional_due=additional_due,
            net_settlement=net,
            usage_breakdown=usage,
            payment_breakdown=payment_breakdown,
            settlement_summary=summary,
        )

    @staticmethod
    def _classify(net: Decimal) -> SettlementSummary:
        """Map the net settlement to exactly one settlement type."""
        if is_negligible(net, settings.SETTLEMENT_TOLERANCE):
            return SettlementSummary(
                settlement_type=SettlementType.BALANCED,
                settlement_amount=ZERO,
                is_refund_due=False,
                is_additional_payment_due=False,
            )
        if net > 0:
            return SettlementSummary(
                settlement_type=SettlementType.REFUND,
                settlement_amount=net,
                is_refund_due=True,
                is_additional_payment_due=False,
            )
        return SettlementSummary(
            settlement_type=SettlementType.ADDITIONAL_PAYMENT,
            settlement_amount=-net,
            is_refund_due=False,
            is_additional_payment_due=True,
        )

    def _record_payment(
        self,
        uow: UnitOfWork,
        student: Student,
        payment_type: PaymentType,
        amount: Decimal,
        payment_date: date,
        notes: str,
    ) -> Payment:
        return uow.get_repo(PaymentRepository).create(
            Payment(
                student_id=student.id,
                hostel_id=student.hostel_id,
                amount=to_money(amount),
                payment_type=payment_type,
                payment_method=PaymentMethod[settings.DEFAULT_PAYMENT_METHOD],
                status=PaymentStatus.COMPLETED,
                payment_date=payment_date,
                notes=notes,
                processed_by=settings.BILLING_SYSTEM_ACTOR,
            )
        )

    def _notify(self, result: SettlementResult) -> None:
        settlement = result.settlement
        summary = settlement.settlement_summary
        outcome = self._notifier.dispatch(
            BillingEvent.SETTLEMENT_PROCESSED,
            settlement.student_id,
            {
                "settlement_type": summary.settlement_type.value,
                "settlement_amount": str(summary.settlement_amount),
                "checkout_date": settlement.checkout_date.isoformat(),
                "payment_id": result.payment_id,
                "message": result.message,
            },
            priority=NotificationPriority.HIGH,
        )
        if not outcome:
            self._logger.warning(
                "Settlement notification not delivered",
                extra={"student_id": settlement.student_id, "reason": outcome.message},
            )
