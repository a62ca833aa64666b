"""
Student billing endpoints: monthly fee, ledger, checkout settlement and
bed switch.
"""
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from hostel_billing.api import deps
from hostel_billing.schemas.billing.bed_switch import BedSwitchRequest, SwitchResult
from hostel_billing.schemas.billing.settlement import (
    CheckoutSettlement,
    SettlementRequest,
    SettlementResult,
    SettlementValidation,
)
from hostel_billing.schemas.fee_structure.fee_calculation import MonthlyFeeCalculation
from hostel_billing.schemas.ledger.ledger_entry import LedgerBalance, LedgerEntryResponse
from hostel_billing.services.billing.bed_switch_service import BedSwitchService
from hostel_billing.services.billing.checkout_settlement_service import CheckoutSettlementService
from hostel_billing.services.fee_structure.fee_configuration_service import FeeConfigurationService
from hostel_billing.services.ledger.ledger_service import LedgerService

router = APIRouter(prefix="/students", tags=["Student Billing"])


@router.get("/{student_id}/monthly-fee", response_model=MonthlyFeeCalculation)
def read_monthly_fee(
    student_id: str,
    fee_service: FeeConfigurationService = Depends(deps.get_fee_configuration_service),
) -> MonthlyFeeCalculation:
    return fee_service.resolve_monthly_fee(student_id)


@router.get("/{student_id}/balance", response_model=LedgerBalance)
def read_balance(
    student_id: str,
    as_of: Optional[date] = Query(None, description="Only count entries dated on or before this day"),
    ledger_service: LedgerService = Depends(deps.get_ledger_service),
) -> LedgerBalance:
    return ledger_service.balance(student_id, as_of=as_of)


@router.get("/{student_id}/ledger", response_model=List[LedgerEntryResponse])
def read_ledger(
    student_id: str,
    include_reversed: bool = Query(True),
    ledger_service: LedgerService = Depends(deps.get_ledger_service),
) -> List[LedgerEntryResponse]:
    entries = ledger_service.list_entries(student_id, include_reversed=include_reversed)
    return [LedgerEntryResponse.model_validate(entry) for entry in entries]


@router.get("/{student_id}/settlement", response_model=CheckoutSettlement)
def preview_settlement(
    student_id: str,
    checkout_date: date = Query(..., description="Last day of stay"),
    settlement_service: CheckoutSettlementService = Depends(deps.get_checkout_settlement_service),
) -> CheckoutSettlement:
    return settlement_service.calculate_settlement(student_id, checkout_date)


@router.post("/{student_id}/settlement", response_model=SettlementResult, status_code=status.HTTP_201_CREATED)
def process_settlement(
    student_id: str,
    payload: SettlementRequest,
    settlement_service: CheckoutSettlementService = Depends(deps.get_checkout_settlement_service),
) -> SettlementResult:
    return settlement_service.process_settlement(student_id, payload.checkout_date, notes=payload.notes)


@router.get("/{student_id}/settlement/validation", response_model=SettlementValidation)
def validate_settlement(
    student_id: str,
    checkout_date: date = Query(..., description="Last day of stay"),
    settlement_service: CheckoutSettlementService = Depends(deps.get_checkout_settlement_service),
) -> SettlementValidation:
    return settlement_service.validate_settlement(student_id, checkout_date)


@router.post("/{student_id}/switch-bed", response_model=SwitchResult)
def switch_bed(
    student_id: str,
    payload: BedSwitchRequest,
    bed_switch_service: BedSwitchService = Depends(deps.get_bed_switch_service),
) -> SwitchResult:
    return bed_switch_service.switch_bed(
        student_id,
        payload.new_bed_id,
        effective_date=payload.effective_date,
        reason=payload.reason,
        approved_by=payload.approved_by,
    )
