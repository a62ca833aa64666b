"""HTTP surface: routing, serialization and error rendering"""
from datetime import date
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from hostel_billing.api.deps import get_notification_dispatcher
from hostel_billing.db.session import get_db, get_session_factory
from hostel_billing.main import app

API = "/api/v1"


@pytest.fixture
def client(session_factory, notifier):
    def override_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_db
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    app.dependency_overrides[get_notification_dispatcher] = lambda: notifier
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def student(seed):
    sid = seed.student(enrollment_date=date(2024, 1, 15))
    seed.fee(sid, "15000")
    return sid


class TestReadEndpoints:

    def test_health(self, client):
        response = client.get(f"{API}/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert response.headers.get("X-Request-ID")

    def test_monthly_fee(self, client, student):
        response = client.get(f"{API}/students/{student}/monthly-fee")
        assert response.status_code == 200
        body = response.json()
        assert body["total_monthly_fee"] == "15000.00"
        assert body["breakdown"][0]["description"] == "Monthly Room Rent"

    def test_balance_of_new_student(self, client, student):
        response = client.get(f"{API}/students/{student}/balance")
        assert response.status_code == 200
        assert response.json()["direction"] == "Nil"

    def test_settlement_preview(self, client, seed, student):
        seed.payment(student, "30000")
        response = client.get(f"{API}/students/{student}/settlement", params={"checkout_date": "2024-03-10"})
        assert response.status_code == 200
        body = response.json()
        assert body["refund_due"] == "1935.48"
        assert body["settlement_summary"]["settlement_type"] == "refund"
        assert [u["days_used"] for u in body["usage_breakdown"]] == [17, 29, 10]

    def test_settlement_validation(self, client, student):
        response = client.get(
            f"{API}/students/{student}/settlement/validation", params={"checkout_date": "2024-03-10"}
        )
        assert response.status_code == 200
        body = response.json()
        assert body["is_valid"] is False
        assert "No payments found for student" in body["issues"]


class TestWriteEndpoints:

    def test_process_settlement_then_ledger(self, client, seed, student):
        seed.payment(student, "30000")

        response = client.post(f"{API}/students/{student}/settlement", json={"checkout_date": "2024-03-10"})
        assert response.status_code == 201
        assert response.json()["success"] is True

        ledger = client.get(f"{API}/students/{student}/ledger").json()
        assert len(ledger) == 1
        assert ledger[0]["credit"] == "1935.48"

        balance = client.get(f"{API}/students/{student}/balance").json()
        assert balance["direction"] == "Cr"
        assert balance["amount"] == "-1935.48"

    def test_reverse_entry(self, client, seed, student):
        seed.payment(student, "20000")
        client.post(f"{API}/students/{student}/settlement", json={"checkout_date": "2024-03-10"})
        entry_id = client.get(f"{API}/students/{student}/ledger").json()[0]["id"]

        response = client.post(
            f"{API}/ledger/entries/{entry_id}/reverse",
            json={"reason": "Settled in cash instead", "reversed_by": "accountant"},
        )
        assert response.status_code == 200
        assert response.json()["is_reversed"] is True

        again = client.post(f"{API}/ledger/entries/{entry_id}/reverse", json={"reason": "once more"})
        assert again.status_code == 409
        assert again.json()["error"]["code"] == "LEDGER_ENTRY_ALREADY_REVERSED"

        visible = client.get(f"{API}/students/{student}/ledger", params={"include_reversed": "false"}).json()
        assert visible == []

    def test_switch_bed(self, client, seed):
        cheap_room = seed.room("101", Decimal("10000.00"))
        dear_room = seed.room("102", Decimal("12000.00"))
        old_bed = seed.bed(cheap_room, "A")
        new_bed = seed.bed(dear_room, "B")
        sid = seed.student()
        seed.place(sid, old_bed)
        seed.fee(sid, "10000")

        response = client.post(
            f"{API}/students/{sid}/switch-bed",
            json={"new_bed_id": new_bed, "effective_date": "2024-02-15", "reason": "Upgrade"},
        )
        assert response.status_code == 200
        body = response.json()
        assert body["rate_difference"] == "2000.00"
        assert body["rate_changed"] is True
        assert body["to_room_id"] == dear_room


class TestErrorRendering:

    def test_unknown_student(self, client):
        response = client.get(f"{API}/students/ghost/settlement", params={"checkout_date": "2024-03-10"})
        assert response.status_code == 404
        error = response.json()["error"]
        assert error["code"] == "STUDENT_NOT_FOUND"
        assert error["type"] == "StudentNotFoundError"

    def test_fee_without_configuration(self, client, seed):
        sid = seed.student()
        response = client.get(f"{API}/students/{sid}/monthly-fee")
        assert response.status_code == 422
        assert response.json()["error"]["code"] == "NO_ACTIVE_CONFIGURATION"

    def test_checkout_before_enrollment(self, client, student):
        response = client.post(f"{API}/students/{student}/settlement", json={"checkout_date": "2024-01-01"})
        assert response.status_code == 422
        assert response.json()["error"]["code"] == "INVALID_DATE_RANGE"

    def test_switch_to_same_bed(self, client, seed):
        room = seed.room("101")
        bed = seed.bed(room, "A")
        sid = seed.student()
        seed.place(sid, bed)

        response = client.post(f"{API}/students/{sid}/switch-bed", json={"new_bed_id": bed})
        assert response.status_code == 409
        assert response.json()["error"]["code"] == "SAME_BED"

    def test_request_body_validation(self, client, student):
        response = client.post(f"{API}/students/{student}/settlement", json={})
        assert response.status_code == 422
