"""Monthly fee resolution and fee component maintenance"""
from datetime import date
from decimal import Decimal

import pytest

from hostel_billing.core.exceptions import (
    DuplicateEntryError,
    InvalidConfigurationError,
    NoActiveConfigurationError,
    StudentNotFoundError,
    ValidationError,
)
from hostel_billing.models.base.enums import FeeType
from hostel_billing.models.fee_structure.fee_component import FeeComponent
from hostel_billing.services.fee_structure.fee_configuration_service import FeeConfigurationService


class TestResolveMonthlyFee:

    def test_sums_active_components(self, db, seed):
        sid = seed.student()
        seed.fee(sid, "12000")
        seed.fee(sid, "1500", FeeType.FOOD)
        seed.fee(sid, "500", FeeType.LAUNDRY)
        seed.fee(sid, "250", FeeType.ADDITIONAL, notes="Locker rent")
        seed.fee(sid, "100", FeeType.ADDITIONAL)

        fee = FeeConfigurationService(db).resolve_monthly_fee(sid)

        assert fee.total_monthly_fee == Decimal("14350.00")
        assert fee.base_monthly_fee == Decimal("12000.00")
        assert fee.food_fee == Decimal("1500.00")
        assert fee.laundry_fee == Decimal("500.00")
        assert fee.additional_fee == Decimal("350.00")
        assert fee.utilities_fee == Decimal("0.00")
        assert len(fee.breakdown) == 5

        descriptions = {item.description for item in fee.breakdown}
        assert {"Monthly Room Rent", "Food Service", "Laundry Service", "Locker rent", "Additional Charge"} == descriptions

    def test_ignores_inactive_components(self, db, seed):
        sid = seed.student()
        old_id = seed.fee(sid, "9000")
        old = db.get(FeeComponent, old_id)
        old.is_active = False
        old.effective_to = date(2024, 1, 31)
        db.commit()
        seed.fee(sid, "11000", effective_from=date(2024, 2, 1))

        fee = FeeConfigurationService(db).resolve_monthly_fee(sid)
        assert fee.total_monthly_fee == Decimal("11000.00")

    def test_no_components(self, db, seed):
        sid = seed.student()
        with pytest.raises(NoActiveConfigurationError) as exc:
            FeeConfigurationService(db).resolve_monthly_fee(sid)
        assert exc.value.message == "No active financial configuration found for student"

    def test_zero_total_rejected(self, db, seed):
        sid = seed.student()
        seed.fee(sid, "0")
        with pytest.raises(InvalidConfigurationError):
            FeeConfigurationService(db).resolve_monthly_fee(sid)


class TestComponentMaintenance:

    def test_create_component(self, db, seed):
        sid = seed.student()
        service = FeeConfigurationService(db)
        component = service.create_component(sid, FeeType.UTILITIES, Decimal("800"), date(2024, 1, 1))
        db.commit()
        assert component.is_active
        assert component.amount == Decimal("800.00")

    def test_second_active_base_rejected(self, db, seed):
        sid = seed.student()
        seed.fee(sid, "10000")
        with pytest.raises(DuplicateEntryError):
            FeeConfigurationService(db).create_component(sid, FeeType.BASE_MONTHLY, Decimal("12000"), date(2024, 2, 1))

    def test_additional_may_repeat(self, db, seed):
        sid = seed.student()
        service = FeeConfigurationService(db)
        service.create_component(sid, FeeType.ADDITIONAL, Decimal("100"), date(2024, 1, 1), notes="Gym")
        service.create_component(sid, FeeType.ADDITIONAL, Decimal("200"), date(2024, 1, 1), notes="Parking")
        assert len(service.list_active_components(sid)) == 2

    def test_negative_amount_rejected(self, db, seed):
        sid = seed.student()
        with pytest.raises(ValidationError):
            FeeConfigurationService(db).create_component(sid, FeeType.FOOD, Decimal("-5"), date(2024, 1, 1))

    def test_unknown_student(self, db):
        with pytest.raises(StudentNotFoundError):
            FeeConfigurationService(db).create_component("missing", FeeType.FOOD, Decimal("5"), date(2024, 1, 1))

    def test_supersede_component(self, db, seed):
        sid = seed.student()
        old_id = seed.fee(sid, "10000")
        service = FeeConfigurationService(db)

        new = service.supersede_component(sid, FeeType.BASE_MONTHLY, Decimal("12000"), date(2024, 2, 15))
        db.commit()

        old = db.get(FeeComponent, old_id)
        assert old.is_active is False
        assert old.effective_to == date(2024, 2, 15)
        assert new.is_active
        assert new.effective_from == date(2024, 2, 15)
        assert service.resolve_monthly_fee(sid).total_monthly_fee == Decimal("12000.00")

    def test_deactivate_returns_count(self, db, seed):
        sid = seed.student()
        seed.fee(sid, "100", FeeType.ADDITIONAL)
        seed.fee(sid, "200", FeeType.ADDITIONAL)
        assert FeeConfigurationService(db).deactivate(sid, FeeType.ADDITIONAL, date(2024, 3, 1)) == 2

    def test_configure_student_fees(self, db, seed):
        sid = seed.student()
        service = FeeConfigurationService(db)
        service.configure_student_fees(
            sid,
            {FeeType.BASE_MONTHLY: Decimal("10000"), FeeType.FOOD: Decimal("3000")},
            date(2024, 1, 15),
        )
        db.commit()
        assert service.resolve_monthly_fee(sid).total_monthly_fee == Decimal("13000.00")
