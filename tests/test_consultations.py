from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from lawconsult.config import settings
from lawconsult.main import app
from lawconsult.services.booking_flow import MSG_LOGIN_REQUIRED, MSG_TIME_REQUIRED

client = TestClient(app)


@pytest.fixture(autouse=True)
def fast_timers(monkeypatch):
    monkeypatch.setattr(settings, "BOOKING_SUBMIT_DELAY_SECONDS", 0)
    monkeypatch.setattr(settings, "ROOM_CONNECT_DELAY_SECONDS", 60)
    monkeypatch.setattr(settings, "ROOM_LEAVE_DELAY_SECONDS", 60)


@pytest.fixture
def consultations(directory):
    directory.docs["consultations/pending1"] = {
        "lawyerId": "1", "clientId": "client1", "type": "phone", "status": "pending",
        "fee": 400, "amount": 400, "createdAt": "2024-01-02T00:00:00Z"}
    directory.docs["consultations/confirmed1"] = {
        "lawyerId": "1", "clientId": "client1", "type": "video", "status": "confirmed",
        "fee": 500, "amount": 500, "createdAt": "2024-01-03T00:00:00Z"}
    directory.docs["consultations/other"] = {
        "lawyerId": "2", "clientId": "someone", "type": "text", "status": "cancelled",
        "createdAt": "2024-01-01T00:00:00Z"}
    return directory


def booking(**overrides):
    payload = {
        "lawyerId": "1",
        "type": "phone",
        "date": datetime.now(timezone.utc).date().isoformat(),
        "timeSlot": "14:00",
        "description": "My landlord kept the deposit",
        "paymentMethod": "alipay",
    }
    payload.update(overrides)
    return payload


def test_book_consultation(directory, login_as, client_user):
    login_as(client_user)
    r = client.post("/api/v1/consultations/book", json=booking())
    assert r.status_code == 201
    data = r.json()
    assert data["status"] == "pending"
    assert data["fee"] == 400
    assert data["duration"] == 30
    assert data["clientId"] == "client1"
    assert data["paymentMethod"] == "alipay"
    assert directory.docs[f"consultations/{data['id']}"]["paymentMethod"] == "alipay"


def test_book_without_slot_is_rejected(directory, login_as, client_user):
    login_as(client_user)
    r = client.post("/api/v1/consultations/book", json=booking(timeSlot=None))
    assert r.status_code == 400
    assert r.json()["detail"] == MSG_TIME_REQUIRED
    assert not [p for p in directory.docs if p.startswith("consultations/")]


def test_book_text_without_slot(directory, login_as, client_user):
    login_as(client_user)
    r = client.post("/api/v1/consultations/book", json=booking(type="text", timeSlot=None, date=None))
    assert r.status_code == 201
    assert r.json()["fee"] == 250


def test_book_requires_login(directory):
    r = client.post("/api/v1/consultations/book", json=booking())
    assert r.status_code == 401
    assert r.json()["detail"] == MSG_LOGIN_REQUIRED


def test_book_unknown_lawyer(directory, login_as, client_user):
    login_as(client_user)
    assert client.post("/api/v1/consultations/book", json=booking(lawyerId="nope")).status_code == 404


def test_list_and_get(consultations, login_as, client_user):
    login_as(client_user)
    data = client.get("/api/v1/consultations").json()
    assert [c["id"] for c in data["consultations"]] == ["confirmed1", "pending1"]

    data = client.get("/api/v1/consultations", params={"status": "pending"}).json()
    assert data["total"] == 1

    assert client.get("/api/v1/consultations/pending1").status_code == 200
    assert client.get("/api/v1/consultations/other").status_code == 403
    assert client.get("/api/v1/consultations/missing").status_code == 404


def test_lawyer_sees_assigned_consultations(consultations, login_as, lawyer_user):
    login_as(lawyer_user)
    data = client.get("/api/v1/consultations").json()
    assert data["total"] == 2


def test_admin_sees_all_consultations(consultations, login_as, admin_user):
    login_as(admin_user)
    data = client.get("/api/v1/consultations").json()
    assert [c["id"] for c in data["consultations"]] == ["confirmed1", "pending1", "other"]

    data = client.get("/api/v1/consultations", params={"status": "cancelled"}).json()
    assert [c["id"] for c in data["consultations"]] == ["other"]


def test_lawyer_confirms_pending(consultations, login_as, lawyer_user):
    login_as(lawyer_user)
    r = client.put("/api/v1/consultations/pending1/status", json={"status": "confirmed"})
    assert r.status_code == 200
    assert consultations.docs["consultations/pending1"]["status"] == "confirmed"


def test_client_may_only_cancel(consultations, login_as, client_user):
    login_as(client_user)
    r = client.put("/api/v1/consultations/confirmed1/status", json={"status": "completed"})
    assert r.status_code == 403
    r = client.put("/api/v1/consultations/confirmed1/status", json={"status": "cancelled"})
    assert r.status_code == 200


def test_illegal_transition_conflicts(consultations, login_as, admin_user):
    login_as(admin_user)
    r = client.put("/api/v1/consultations/pending1/status", json={"status": "completed"})
    assert r.status_code == 409
    r = client.put("/api/v1/consultations/other/status", json={"status": "confirmed"})
    assert r.status_code == 409
    assert consultations.docs["consultations/pending1"]["status"] == "pending"


def test_room_lifecycle(consultations, login_as, client_user):
    login_as(client_user)
    with TestClient(app) as c:
        assert c.get("/api/v1/consultations/confirmed1/room").status_code == 404

        r = c.post("/api/v1/consultations/confirmed1/room")
        assert r.status_code == 200
        assert r.json()["status"] == "connecting"
        assert r.json()["lawyerName"] == "张明华"

        r = c.post("/api/v1/consultations/confirmed1/room/messages", json={"content": "hello"})
        assert r.status_code == 409

        r = c.post("/api/v1/consultations/confirmed1/room/end")
        assert r.json()["status"] == "ended"


def test_room_closed_for_finished_consultation(consultations, login_as, admin_user):
    login_as(admin_user)
    with TestClient(app) as c:
        assert c.post("/api/v1/consultations/other/room").status_code == 409


def test_completing_consultation_ends_room(consultations, login_as, lawyer_user):
    login_as(lawyer_user)
    with TestClient(app) as c:
        c.post("/api/v1/consultations/confirmed1/room")
        r = c.put("/api/v1/consultations/confirmed1/status", json={"status": "completed"})
        assert r.status_code == 200
        assert c.get("/api/v1/consultations/confirmed1/room").json()["status"] == "ended"
