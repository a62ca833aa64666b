"""
Bed Switch Service

Moves an active student to another bed and carries the financial effect of
the move:
- Supersedes the BASE_MONTHLY fee component when the rate changes
- Posts the monthly rate difference to the ledger
- Moves bed status and occupancy records
- Keeps an audit row with the balances before and after

The move runs in one unit of work and is serialized per student.
"""

from datetime import date
from decimal import Decimal
from typing import Callable, Optional

from sqlalchemy.orm import Session

from hostel_billing.config.settings import settings
from hostel_billing.core.exceptions import (
    BedNotFoundError,
    BedUnavailableError,
    InvalidConfigurationError,
    NoCurrentBedError,
    SameBedError,
    StudentNotActiveError,
    StudentNotFoundError,
)
from hostel_billing.core.locking import KeyedLock, student_locks
from hostel_billing.core.logging import get_logger, log_context
from hostel_billing.models.audit.bed_switch_audit import BedSwitchAudit
from hostel_billing.models.base.enums import FeeType, LedgerEntryType, OccupancyStatus
from hostel_billing.models.room.bed import Bed
from hostel_billing.repositories.audit.bed_switch_audit_repository import BedSwitchAuditRepository
from hostel_billing.repositories.room.bed_repository import BedRepository
from hostel_billing.repositories.room.room_occupancy_repository import RoomOccupancyRepository
from hostel_billing.repositories.student.student_repository import StudentRepository
from hostel_billing.schemas.billing.bed_switch import SwitchResult
from hostel_billing.schemas.ledger.ledger_entry import LedgerEntryCreate
from hostel_billing.services.base.notification_dispatcher import BillingEvent, NotificationDispatcher
from hostel_billing.services.billing.occupancy_sync_service import OccupancySyncService
from hostel_billing.services.common import UnitOfWork
from hostel_billing.services.fee_structure.fee_configuration_service import FeeConfigurationService
from hostel_billing.services.ledger.ledger_service import LedgerService
from hostel_billing.utils.date_utils import today_utc
from hostel_billing.utils.money import to_money


class BedSwitchService:
    """
    Service for switching a student's bed with rate adjustment.

    The ledger adjustment is the full monthly rate difference, posted on the
    effective date.
    """

    def __init__(
        self,
        session_factory: Callable[[], Session],
        notifier: Optional[NotificationDispatcher] = None,
        occupancy_sync: Optional[OccupancySyncService] = None,
        locks: KeyedLock = student_locks,
    ):
        self._session_factory = session_factory
        self._notifier = notifier or NotificationDispatcher()
        self._occupancy_sync = occupancy_sync or OccupancySyncService(session_factory)
        self._locks = locks
        self._logger = get_logger(self.__class__.__name__)

    def switch_bed(
        self,
        student_id: str,
        new_bed_id: str,
        effective_date: Optional[date] = None,
        reason: Optional[str] = None,
        approved_by: Optional[str] = None,
    ) -> SwitchResult:
        """
        Move the student to `new_bed_id` from `effective_date` (today by default).

        Raises:
            StudentNotFoundError: If the student does not exist
            StudentNotActiveError: If the student is not ACTIVE
            NoCurrentBedError: If the student has no bed to move from
            SameBedError: If the target is the current bed
            BedNotFoundError: If the target bed does not exist
            BedUnavailableError: If the target bed is not AVAILABLE
            InvalidConfigurationError: If either bed has no rate
        """
        effective_date = effective_date or today_utc()

        with self._locks.hold(student_id), log_context(student_id):
            with UnitOfWork(self._session_factory) as uow:
                student = uow.get_repo(StudentRepository).get_for_update(student_id)
                if student is None:
                    raise StudentNotFoundError(student_id)
                if not student.is_active:
                    raise StudentNotActiveError(student_id, student.status.value)
                if not student.bed_id:
                    raise NoCurrentBedError(student_id)
                if student.bed_id == new_bed_id:
                    raise SameBedError(student_id, new_bed_id)

                bed_repo = uow.get_repo(BedRepository)
                old_bed = bed_repo.get_for_update(student.bed_id)
                if old_bed is None:
                    raise NoCurrentBedError(student_id)
                new_bed = bed_repo.get_for_update(new_bed_id)
                if new_bed is None:
                    raise BedNotFoundError(new_bed_id)
                if not new_bed.is_available:
                    raise BedUnavailableError(new_bed_id, new_bed.status.value)

                old_rate = self._rate_of(old_bed)
                new_rate = self._rate_of(new_bed)
                rate_difference = to_money(new_rate - old_rate)
                rate_changed = abs(rate_difference) >= settings.RATE_CHANGE_TOLERANCE

                ledger = LedgerService(uow.session)
                old_balance = ledger.balance(student.id).amount

                new_component_id = None
                ledger_entry_id = None
                if rate_changed:
                    component = FeeConfigurationService(uow.session).supersede_component(
                        student.id,
                        FeeType.BASE_MONTHLY,
                        new_rate,
                        effective_date,
                        notes=f"Rate change on bed switch to {new_bed.bed_number}",
                    )
                    new_component_id = component.id

                    entry = ledger.append_entry(
                        LedgerEntryCreate(
                            student_id=student.id,
                            hostel_id=student.hostel_id,
                            entry_date=effective_date,
                            entry_type=LedgerEntryType.ADJUSTMENT,
                            debit=rate_difference if rate_difference > 0 else Decimal("0"),
                            credit=-rate_difference if rate_difference < 0 else Decimal("0"),
                            description=(
                                f"Bed switch rate adjustment - {student.name} - "
                                f"{old_bed.bed_number} to {new_bed.bed_number}"
                            ),
                            notes=reason,
                        )
                    )
                    ledger_entry_id = entry.id

                from_room_id, to_room_id = old_bed.room_id, new_bed.room_id
                self._move(uow, student, old_bed, new_bed, effective_date, reason)

                new_balance = ledger.balance(student.id).amount
                advance_adjustment = to_money(old_balance - new_balance)

                audit = uow.get_repo(BedSwitchAuditRepository).create(
                    BedSwitchAudit(
                        student_id=student.id,
                        from_bed_id=old_bed.id,
                        to_bed_id=new_bed.id,
                        from_room_id=from_room_id,
                        to_room_id=to_room_id,
                        old_rate=old_rate,
                        new_rate=new_rate,
                        rate_difference=rate_difference,
                        old_balance=old_balance,
                        new_balance=new_balance,
                        advance_adjustment=advance_adjustment,
                        switch_date=effective_date,
                        reason=reason,
                        approved_by=approved_by,
                        financial_snapshot={
                            "old_rate": str(old_rate),
                            "new_rate": str(new_rate),
                            "rate_difference": str(rate_difference),
                            "old_balance": str(old_balance),
                            "new_balance": str(new_balance),
                            "ledger_entry_id": ledger_entry_id,
                            "new_fee_component_id": new_component_id,
                        },
                    )
                )

                if rate_changed:
                    message = (
                        f"Bed switched with rate change of {settings.CURRENCY} {rate_difference:,}"
                    )
                else:
                    message = "Bed switched - rate unchanged"

                result = SwitchResult(
                    student_id=student.id,
                    from_bed_id=old_bed.id,
                    to_bed_id=new_bed.id,
                    from_room_id=from_room_id,
                    to_room_id=to_room_id,
                    effective_date=effective_date,
                    old_rate=old_rate,
                    new_rate=new_rate,
                    rate_difference=rate_difference,
                    rate_changed=rate_changed,
                    ledger_entry_id=ledger_entry_id,
                    new_fee_component_id=new_component_id,
                    old_balance=old_balance,
                    new_balance=new_balance,
                    advance_adjustment=advance_adjustment,
                    audit_id=audit.id,
                    message=message,
                )

                uow.on_commit(lambda: self._resync(from_room_id, to_room_id))
                uow.on_commit(lambda: self._notify(result))

        self._logger.info(
            "Bed switch completed",
            extra={
                "student_id": student_id,
                "from_bed_id": result.from_bed_id,
                "to_bed_id": result.to_bed_id,
                "rate_difference": str(rate_difference),
                "audit_id": result.audit_id,
            },
        )
        return result

    # ==================== Helpers ====================

    @staticmethod
    def _rate_of(bed: Bed) -> Decimal:
        rate = bed.effective_rate
        if rate is None:
            raise InvalidConfigurationError(
                "Bed has no monthly rate and its room has none either",
                config_key="monthly_rate",
                config_value=bed.id,
            )
        return to_money(rate)

    def _move(
        self,
        uow: UnitOfWork,
        student,
        old_bed: Bed,
        new_bed: Bed,
        effective_date: date,
        reason: Optional[str],
    ) -> None:
        bed_repo = uow.get_repo(BedRepository)
        occupancy_repo = uow.get_repo(RoomOccupancyRepository)

        bed_repo.release(old_bed)
        bed_repo.occupy(new_bed, student.id)

        occupancy_repo.close_active(student.id, effective_date, OccupancyStatus.TRANSFERRED)
        occupancy_repo.open(
            new_bed.room_id,
            new_bed.id,
            student.id,
            effective_date,
            notes=reason or f"Transferred from bed {old_bed.bed_number}",
        )

        uow.get_repo(StudentRepository).update_placement(student, new_bed.room_id, new_bed.id)

    def _resync(self, *room_ids: str) -> None:
        outcome = self._occupancy_sync.resync_rooms(list(dict.fromkeys(room_ids)))
        if not outcome:
            self._logger.warning(
                "Room occupancy resync failed after bed switch",
                extra={"room_ids": list(room_ids), "reason": outcome.message},
            )

    def _notify(self, result: SwitchResult) -> None:
        outcome = self._notifier.dispatch(
            BillingEvent.BED_SWITCHED,
            result.student_id,
            {
                "from_bed_id": result.from_bed_id,
                "to_bed_id": result.to_bed_id,
                "effective_date": result.effective_date.isoformat(),
                "rate_difference": str(result.rate_difference),
                "message": result.message,
            },
        )
        if not outcome:
            self._logger.warning(
                "Bed switch notification not delivered",
                extra={"student_id": result.student_id, "reason": outcome.message},
            )
