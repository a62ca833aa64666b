"""Shared fixtures: an in-memory database per test and seed helpers."""
import os

# Must be set before hostel_billing.config is imported
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("LOG_FORMAT", "text")

from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from hostel_billing.db.base import Base
from hostel_billing.models.base.enums import (
    BedStatus,
    FeeType,
    OccupancyStatus,
    PaymentStatus,
    PaymentType,
    StudentStatus,
)
from hostel_billing.models.fee_structure.fee_component import FeeComponent
from hostel_billing.models.payment.payment import Payment
from hostel_billing.models.room.bed import Bed
from hostel_billing.models.room.room import Room
from hostel_billing.models.room.room_occupancy import RoomOccupancy
from hostel_billing.models.student.student import Student
from hostel_billing.services.base.notification_dispatcher import NotificationDispatcher

HOSTEL_ID = "hostel-1"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    """Session for seeding and assertions. Call expire_all() after a service commits."""
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def notifier():
    return NotificationDispatcher(enabled=True)


class Seeder:
    """Creates committed rows and returns their ids."""

    def __init__(self, session):
        self.session = session

    def _save(self, obj):
        self.session.add(obj)
        self.session.commit()
        return obj.id

    def room(self, room_number="101", monthly_rate=Decimal("10000.00"), bed_count=2, hostel_id=HOSTEL_ID):
        return self._save(
            Room(
                hostel_id=hostel_id,
                room_number=room_number,
                monthly_rate=monthly_rate,
                bed_count=bed_count,
                occupied_beds=0,
            )
        )

    def bed(self, room_id, bed_number="A", monthly_rate=None, status=BedStatus.AVAILABLE):
        return self._save(
            Bed(
                room_id=room_id,
                bed_number=bed_number,
                monthly_rate=monthly_rate,
                status=status,
            )
        )

    def student(
        self,
        name="Asha Rai",
        enrollment_date=date(2024, 1, 15),
        status=StudentStatus.ACTIVE,
        hostel_id=HOSTEL_ID,
    ):
        return self._save(
            Student(
                name=name,
                hostel_id=hostel_id,
                enrollment_date=enrollment_date,
                status=status,
            )
        )

    def place(self, student_id, bed_id, check_in_date=date(2024, 1, 15)):
        """Put a student in a bed with an active occupancy record."""
        bed = self.session.get(Bed, bed_id)
        student = self.session.get(Student, student_id)
        bed.status = BedStatus.OCCUPIED
        bed.current_student_id = student_id
        student.room_id = bed.room_id
        student.bed_id = bed_id
        self.session.add(
            RoomOccupancy(
                room_id=bed.room_id,
                bed_id=bed_id,
                student_id=student_id,
                check_in_date=check_in_date,
                status=OccupancyStatus.ACTIVE,
            )
        )
        room = self.session.get(Room, bed.room_id)
        room.occupied_beds += 1
        self.session.commit()

    def fee(self, student_id, amount, fee_type=FeeType.BASE_MONTHLY, effective_from=date(2024, 1, 1), notes=None):
        return self._save(
            FeeComponent(
                student_id=student_id,
                fee_type=fee_type,
                amount=Decimal(str(amount)),
                effective_from=effective_from,
                is_active=True,
                notes=notes,
            )
        )

    def payment(
        self,
        student_id,
        amount,
        payment_date=date(2024, 1, 15),
        status=PaymentStatus.COMPLETED,
        payment_type=PaymentType.REGULAR,
        hostel_id=HOSTEL_ID,
    ):
        return self._save(
            Payment(
                student_id=student_id,
                hostel_id=hostel_id,
                amount=Decimal(str(amount)),
                payment_type=payment_type,
                status=status,
                payment_date=payment_date,
            )
        )


@pytest.fixture
def seed(db):
    return Seeder(db)
