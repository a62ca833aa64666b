# hostel_billing/api/deps.py
"""
FastAPI dependencies for the billing API.

Example usage in a router:
    from fastapi import Depends, APIRouter
    from hostel_billing.api import deps

    router = APIRouter()

    @router.get("/students/{student_id}/balance")
    def read_balance(student_id: str, db = Depends(deps.get_db)):
        ...
"""

from typing import Callable

from fastapi import Depends
from sqlalchemy.orm import Session

from hostel_billing.db.session import get_db, get_session_factory
from hostel_billing.services.base.notification_dispatcher import NotificationDispatcher
from hostel_billing.services.billing.bed_switch_service import BedSwitchService
from hostel_billing.services.billing.checkout_settlement_service import CheckoutSettlementService
from hostel_billing.services.fee_structure.fee_configuration_service import FeeConfigurationService
from hostel_billing.services.ledger.ledger_service import LedgerService

# Shared by every request in the process
_notification_dispatcher = NotificationDispatcher()


# --- Database ------------------------------------------------------------------

SessionFactory = Callable[[], Session]


def get_notification_dispatcher() -> NotificationDispatcher:
    return _notification_dispatcher


# --- Session-scoped read services ---------------------------------------------

def get_fee_configuration_service(db: Session = Depends(get_db)) -> FeeConfigurationService:
    return FeeConfigurationService(db)


def get_ledger_service(db: Session = Depends(get_db)) -> LedgerService:
    return LedgerService(db)


# --- Unit-of-work services -----------------------------------------------------

def get_checkout_settlement_service(
    session_factory: SessionFactory = Depends(get_session_factory),
    notifier: NotificationDispatcher = Depends(get_notification_dispatcher),
) -> CheckoutSettlementService:
    return CheckoutSettlementService(session_factory, notifier=notifier)


def get_bed_switch_service(
    session_factory: SessionFactory = Depends(get_session_factory),
    notifier: NotificationDispatcher = Depends(get_notification_dispatcher),
) -> BedSwitchService:
    return BedSwitchService(session_factory, notifier=notifier)


__all__ = [
    "get_db",
    "get_session_factory",
    "get_notification_dispatcher",
    "get_fee_configuration_service",
    "get_ledger_service",
    "get_checkout_settlement_service",
    "get_bed_switch_service",
]
