"""
Payment endpoints

Endpoints:
- POST /api/v1/payments - create a payment order for a consultation
- POST /api/v1/payments/{id}/pay - settle an order
- POST /api/v1/payments/{id}/refund - refund a paid order
- GET /api/v1/payments - the caller's payment history
"""

from fastapi import APIRouter, Depends, HTTPException

from lawconsult.dependencies import get_current_user
from lawconsult.models.consultation import Consultation, firestore_consultation_to_model
from lawconsult.models.payment import PaymentOrder, firestore_payment_to_model
from lawconsult.models.user import User, UserRole
from lawconsult.schemas.payment import PaymentCreateSchema, PaymentListResponse
from lawconsult.services.firebase_service import firebase_service
from lawconsult.services.payment_service import PaymentError, payment_service

router = APIRouter(prefix="/api/v1/payments", tags=["payments"])


async def _client_consultation(consultation_id: str, current_user: User) -> Consultation:
    doc = await firebase_service.get_document(f"consultations/{consultation_id}")
    if not doc:
        raise HTTPException(status_code=404, detail="Consultation not found")
    consultation = firestore_consultation_to_model(doc, consultation_id)
    if consultation.client_id != current_user.uid and current_user.role != UserRole.ADMIN:
        raise HTTPException(status_code=403, detail="Not your consultation")
    return consultation


async def _own_order(payment_id: str, current_user: User) -> PaymentOrder:
    doc = await firebase_service.get_document(f"payments/{payment_id}")
    if not doc:
        raise HTTPException(status_code=404, detail="Payment not found")
    order = firestore_payment_to_model(doc, payment_id)
    if order.client_id != current_user.uid and current_user.role != UserRole.ADMIN:
        raise HTTPException(status_code=403, detail="Not your payment")
    return order


@router.post("", response_model=PaymentOrder, status_code=201)
async def create_payment(
    data: PaymentCreateSchema, current_user: User = Depends(get_current_user)
):
    consultation = await _client_consultation(data.consultation_id, current_user)
    try:
        method = data.payment_method or consultation.payment_method
        return await payment_service.create_order(consultation, method)
    except PaymentError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.post("/{payment_id}/pay", response_model=PaymentOrder)
async def pay(payment_id: str, current_user: User = Depends(get_current_user)):
    order = await _own_order(payment_id, current_user)
    consultation = await _client_consultation(order.consultation_id, current_user)
    try:
        return await payment_service.pay(order, consultation)
    except PaymentError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.post("/{payment_id}/refund", response_model=PaymentOrder)
async def refund(payment_id: str, current_user: User = Depends(get_current_user)):
    order = await _own_order(payment_id, current_user)
    consultation = await _client_consultation(order.consultation_id, current_user)
    try:
        return await payment_service.refund(order, consultation)
    except PaymentError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.get("", response_model=PaymentListResponse)
async def payment_history(current_user: User = Depends(get_current_user)):
    docs, _ = await firebase_service.query_collection(
        "payments", filters={"clientId": current_user.uid}
    )
    payments = [firestore_payment_to_model(doc, doc_id) for doc_id, doc in docs]
    payments.sort(key=lambda p: p.created_at, reverse=True)
    return PaymentListResponse(payments=payments, total=len(payments))
