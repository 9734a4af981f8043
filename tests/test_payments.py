import pytest
from fastapi.testclient import TestClient

from lawconsult.main import app
from lawconsult.models.consultation import Consultation
from lawconsult.models.payment import PaymentMethod, PaymentOrder
from lawconsult.services.consultation_room import ConsultationRoom, RoomRegistry, RoomStatus
from lawconsult.services.payment_service import PaymentError, PaymentService

client = TestClient(app)


@pytest.fixture
def consultation(store):
    store.docs["consultations/c1"] = {
        "lawyerId": "1", "clientId": "client1", "type": "phone", "status": "pending",
        "fee": 400, "amount": 400}
    return store


def create_and_pay(method="wechat"):
    order = client.post("/api/v1/payments", json={"consultationId": "c1", "paymentMethod": method}).json()
    return client.post(f"/api/v1/payments/{order['id']}/pay").json()


def test_create_order_takes_consultation_amount(consultation, login_as, client_user):
    login_as(client_user)
    r = client.post("/api/v1/payments", json={"consultationId": "c1", "paymentMethod": "card"})
    assert r.status_code == 201
    data = r.json()
    assert data["amount"] == 400
    assert data["status"] == "pending"
    assert data["paymentMethod"] == "card"
    assert consultation.docs[f"payments/{data['id']}"]["clientId"] == "client1"


def test_pay_confirms_consultation(consultation, login_as, client_user):
    login_as(client_user)
    paid = create_and_pay("alipay")
    assert paid["status"] == "paid"
    assert paid["paidAt"] is not None
    assert paid["providerReference"].startswith("alipay_")
    assert consultation.docs["consultations/c1"]["status"] == "confirmed"

    r = client.post(f"/api/v1/payments/{paid['id']}/pay")
    assert r.status_code == 409


def test_refund_cancels_consultation(consultation, login_as, client_user):
    login_as(client_user)
    paid = create_and_pay()
    r = client.post(f"/api/v1/payments/{paid['id']}/refund")
    assert r.status_code == 200
    assert r.json()["status"] == "refunded"
    assert consultation.docs["consultations/c1"]["status"] == "cancelled"


def test_refund_requires_paid_order(consultation, login_as, client_user):
    login_as(client_user)
    order = client.post("/api/v1/payments", json={"consultationId": "c1"}).json()
    assert client.post(f"/api/v1/payments/{order['id']}/refund").status_code == 409


def test_cannot_pay_for_someone_else(consultation, login_as, lawyer_user):
    login_as(lawyer_user)
    r = client.post("/api/v1/payments", json={"consultationId": "c1"})
    assert r.status_code == 403


def test_cancelled_consultation_cannot_be_paid(consultation, login_as, client_user):
    login_as(client_user)
    consultation.docs["consultations/c1"]["status"] = "cancelled"
    r = client.post("/api/v1/payments", json={"consultationId": "c1"})
    assert r.status_code == 409


def test_payment_history(consultation, login_as, client_user):
    login_as(client_user)
    create_and_pay()
    consultation.docs["payments/foreign"] = {"consultationId": "x", "clientId": "other", "amount": 10}
    data = client.get("/api/v1/payments").json()
    assert data["total"] == 1
    assert data["payments"][0]["clientId"] == "client1"


@pytest.mark.asyncio
async def test_completed_consultation_is_not_refunded(store):
    service = PaymentService()
    order = PaymentOrder(id="p1", consultation_id="c1", client_id="client1", amount=10,
                         status="paid", payment_method=PaymentMethod.CARD)
    done = Consultation(id="c1", lawyer_id="1", client_id="client1", status="completed")
    with pytest.raises(PaymentError):
        await service.refund(order, done)


@pytest.mark.asyncio
async def test_refund_ends_open_room(store):
    rooms = RoomRegistry()
    room = rooms.open(ConsultationRoom("c1", "张明华", connect_delay=0, reply_delay=(0, 0),
                                       leave_delay=0))
    service = PaymentService(rooms=rooms)
    order = PaymentOrder(id="p1", consultation_id="c1", client_id="client1", amount=10,
                         status="paid", payment_method=PaymentMethod.CARD)
    confirmed = Consultation(id="c1", lawyer_id="1", client_id="client1", status="confirmed")
    store.docs["consultations/c1"] = {"lawyerId": "1", "clientId": "client1", "status": "confirmed"}
    store.docs["payments/p1"] = {"status": "paid"}

    await service.refund(order, confirmed)

    assert room.status == RoomStatus.ENDED
    assert store.docs["consultations/c1"]["status"] == "cancelled"
    rooms.close_all()


def test_order_defaults_to_method_chosen_at_booking(consultation, login_as, client_user):
    login_as(client_user)
    consultation.docs["consultations/c1"]["paymentMethod"] = "alipay"
    r = client.post("/api/v1/payments", json={"consultationId": "c1"})
    assert r.status_code == 201
    assert r.json()["paymentMethod"] == "alipay"
