"""
Consultation Routes for LawConsult Backend

This module defines the HTTP endpoints for consultations:
- Book a consultation through the booking flow
- List and fetch the caller's consultations
- Move a consultation through its status lifecycle
- Open, talk in and end the simulated consultation room
"""

import logging
from datetime import datetime, UTC
from typing import Optional
from uuid import uuid4

from fastapi import APIRouter, Depends, HTTPException, Query

from lawconsult.config import settings
from lawconsult.dependencies import get_current_user, get_optional_user
from lawconsult.models.consultation import (
    Consultation,
    ConsultationStatus,
    InvalidTransitionError,
    check_transition,
    consultation_model_to_firestore,
    firestore_consultation_to_model,
)
from lawconsult.models.lawyer import firestore_lawyer_to_model
from lawconsult.models.user import User, UserRole
from lawconsult.schemas.consultation import (
    BookingCreateSchema,
    ConsultationListResponse,
    RoomMessageCreate,
    RoomResponse,
    StatusUpdateSchema,
)
from lawconsult.services.booking_flow import (
    MSG_LOGIN_REQUIRED,
    BookingFlow,
    BookingRequest,
)
from lawconsult.services.consultation_room import (
    ConsultationRoom,
    RoomStateError,
    room_registry,
)
from lawconsult.services.firebase_service import firebase_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/consultations", tags=["consultations"])

# Status changes each side of a consultation may request
LAWYER_TARGETS = {ConsultationStatus.CONFIRMED, ConsultationStatus.COMPLETED, ConsultationStatus.CANCELLED}
CLIENT_TARGETS = {ConsultationStatus.CANCELLED}


async def _load_consultation(consultation_id: str, current_user: User) -> Consultation:
    doc = await firebase_service.get_document(f"consultations/{consultation_id}")
    if not doc:
        raise HTTPException(status_code=404, detail="Consultation not found")
    consultation = firestore_consultation_to_model(doc, consultation_id)
    if current_user.role != UserRole.ADMIN and current_user.uid not in (
        consultation.client_id,
        consultation.lawyer_id,
    ):
        raise HTTPException(status_code=403, detail="Not a participant of this consultation")
    return consultation


def _room_response(room: ConsultationRoom) -> RoomResponse:
    return RoomResponse(
        consultation_id=room.consultation_id,
        status=room.status,
        lawyer_name=room.lawyer_name,
        messages=room.messages,
    )


@router.post("/book", response_model=Consultation, status_code=201)
async def book_consultation(
    booking: BookingCreateSchema,
    current_user: Optional[User] = Depends(get_optional_user),
):
    """
    Book a consultation

    - Guards: signed-in user, time slot for phone/video, non-empty description
    - Fee and duration follow the consultation type
    - The consultation is stored as ``pending``
    """
    lawyer_doc = await firebase_service.get_document(f"lawyers/{booking.lawyer_id}")
    if not lawyer_doc:
        raise HTTPException(status_code=404, detail="Lawyer not found")
    lawyer = firestore_lawyer_to_model(lawyer_doc, booking.lawyer_id)
    if not lawyer.is_active:
        raise HTTPException(status_code=404, detail="Lawyer not found")

    async def persist(request: BookingRequest) -> Consultation:
        quote = flow.quote(request.consultation_type)
        consultation = Consultation(
            id=uuid4().hex,
            lawyer_id=lawyer.id,
            client_id=current_user.uid,
            type=request.consultation_type,
            status=ConsultationStatus.PENDING,
            scheduled_at=request.scheduled_at(),
            duration=quote["duration"],
            fee=quote["fee"],
            amount=quote["fee"],
            description=request.description.strip(),
            payment_method=request.payment_method,
        )
        await firebase_service.set_document(
            f"consultations/{consultation.id}", consultation_model_to_firestore(consultation)
        )
        return consultation

    flow = BookingFlow(
        lawyer,
        current_user,
        submit_delay=settings.BOOKING_SUBMIT_DELAY_SECONDS,
        redirect_delay=settings.BOOKING_REDIRECT_DELAY_SECONDS,
        on_submit=persist,
    )
    request = BookingRequest(
        consultation_type=booking.type,
        description=booking.description,
        date=booking.booking_date,
        time_slot=booking.time_slot,
        payment_method=booking.payment_method,
    )

    if not await flow.submit(request):
        status_code = 401 if flow.error == MSG_LOGIN_REQUIRED else 400
        raise HTTPException(status_code=status_code, detail=flow.error)

    logger.info("Consultation %s booked with lawyer %s", flow.result.id, lawyer.id)
    return flow.result


@router.get("", response_model=ConsultationListResponse)
async def list_consultations(
    status: Optional[ConsultationStatus] = Query(None),
    current_user: User = Depends(get_current_user),
):
    """Clients see the consultations they booked, lawyers see theirs and admins see all."""
    filters = {}
    if current_user.role == UserRole.LAWYER:
        filters["lawyerId"] = current_user.uid
    elif current_user.role != UserRole.ADMIN:
        filters["clientId"] = current_user.uid
    if status is not None:
        filters["status"] = status.value

    docs, _ = await firebase_service.query_collection("consultations", filters=filters)
    consultations = [firestore_consultation_to_model(doc, doc_id) for doc_id, doc in docs]
    consultations.sort(key=lambda c: c.created_at, reverse=True)
    return ConsultationListResponse(consultations=consultations, total=len(consultations))


@router.get("/{consultation_id}", response_model=Consultation)
async def get_consultation(
    consultation_id: str, current_user: User = Depends(get_current_user)
):
    return await _load_consultation(consultation_id, current_user)


@router.put("/{consultation_id}/status", response_model=Consultation)
async def update_status(
    consultation_id: str,
    data: StatusUpdateSchema,
    current_user: User = Depends(get_current_user),
):
    consultation = await _load_consultation(consultation_id, current_user)

    if current_user.role != UserRole.ADMIN:
        allowed = LAWYER_TARGETS if current_user.uid == consultation.lawyer_id else CLIENT_TARGETS
        if data.status not in allowed:
            raise HTTPException(
                status_code=403, detail=f"Not allowed to mark consultation {data.status.value}")

    try:
        consultation.status = check_transition(consultation.status, data.status)
    except InvalidTransitionError as e:
        raise HTTPException(status_code=409, detail=str(e))

    consultation.updated_at = datetime.now(UTC)
    await firebase_service.update_document(
        f"consultations/{consultation_id}",
        {"status": consultation.status.value, "updatedAt": consultation.updated_at},
    )
    if consultation.status in (ConsultationStatus.COMPLETED, ConsultationStatus.CANCELLED):
        room = room_registry.get(consultation_id)
        if room is not None:
            room.end()
    logger.info("Consultation %s is now %s", consultation_id, consultation.status.value)
    return consultation


@router.post("/{consultation_id}/room", response_model=RoomResponse)
async def open_room(consultation_id: str, current_user: User = Depends(get_current_user)):
    consultation = await _load_consultation(consultation_id, current_user)
    if consultation.status in (ConsultationStatus.CANCELLED, ConsultationStatus.COMPLETED):
        raise HTTPException(
            status_code=409, detail=f"Consultation is {consultation.status.value}")

    lawyer_doc = await firebase_service.get_document(f"lawyers/{consultation.lawyer_id}")
    if not lawyer_doc:
        raise HTTPException(status_code=404, detail="Lawyer not found")
    lawyer = firestore_lawyer_to_model(lawyer_doc, consultation.lawyer_id)

    room = room_registry.open(
        ConsultationRoom(
            consultation_id,
            lawyer.name,
            connect_delay=settings.ROOM_CONNECT_DELAY_SECONDS,
            reply_delay=(settings.ROOM_REPLY_DELAY_MIN_SECONDS, settings.ROOM_REPLY_DELAY_MAX_SECONDS),
            leave_delay=settings.ROOM_LEAVE_DELAY_SECONDS,
            on_leave=lambda: room_registry.discard(consultation_id),
        )
    )
    return _room_response(room)


def _get_room(consultation_id: str) -> ConsultationRoom:
    room = room_registry.get(consultation_id)
    if room is None:
        raise HTTPException(status_code=404, detail="Consultation room is not open")
    return room


@router.get("/{consultation_id}/room", response_model=RoomResponse)
async def get_room(consultation_id: str, current_user: User = Depends(get_current_user)):
    await _load_consultation(consultation_id, current_user)
    return _room_response(_get_room(consultation_id))


@router.post("/{consultation_id}/room/messages", response_model=RoomResponse)
async def send_room_message(
    consultation_id: str,
    data: RoomMessageCreate,
    current_user: User = Depends(get_current_user),
):
    await _load_consultation(consultation_id, current_user)
    room = _get_room(consultation_id)
    try:
        room.send(data.content)
    except RoomStateError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return _room_response(room)


@router.post("/{consultation_id}/room/end", response_model=RoomResponse)
async def end_room(consultation_id: str, current_user: User = Depends(get_current_user)):
    await _load_consultation(consultation_id, current_user)
    room = _get_room(consultation_id)
    room.end()
    return _room_response(room)
