"""
Ledger entry endpoints.
"""
from fastapi import APIRouter, Depends

from hostel_billing.api import deps
from hostel_billing.schemas.ledger.ledger_entry import LedgerEntryResponse, LedgerReversalRequest
from hostel_billing.services.common import UnitOfWork
from hostel_billing.services.ledger.ledger_service import LedgerService

router = APIRouter(prefix="/ledger", tags=["Ledger"])


@router.post("/entries/{entry_id}/reverse", response_model=LedgerEntryResponse)
def reverse_entry(
    entry_id: str,
    payload: LedgerReversalRequest,
    session_factory: deps.SessionFactory = Depends(deps.get_session_factory),
) -> LedgerEntryResponse:
    with UnitOfWork(session_factory) as uow:
        entry = LedgerService(uow.session).reverse_entry(
            entry_id,
            payload.reason,
            reversed_by=payload.reversed_by,
        )
        response = LedgerEntryResponse.model_validate(entry)
    return response
