"""
Schemas for booking, consultation status and the consultation room
"""

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field, ConfigDict

from lawconsult.models.consultation import Consultation, ConsultationStatus, ConsultationType
from lawconsult.models.payment import PaymentMethod
from lawconsult.services.consultation_room import RoomMessage, RoomStatus


class BookingCreateSchema(BaseModel):
    """Booking form submitted by a client"""

    lawyer_id: str = Field(..., alias="lawyerId")
    type: ConsultationType = ConsultationType.TEXT
    booking_date: Optional[date] = Field(None, alias="date")
    time_slot: Optional[str] = Field(None, alias="timeSlot")
    description: str = Field(default="", max_length=2000)
    payment_method: PaymentMethod = Field(
        default=PaymentMethod.WECHAT, alias="paymentMethod")

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "lawyerId": "1",
                "type": "phone",
                "date": "2024-01-20",
                "timeSlot": "14:00",
                "description": "My landlord refuses to return the deposit",
                "paymentMethod": "wechat",
            }
        },
    )


class ConsultationListResponse(BaseModel):
    consultations: List[Consultation]
    total: int


class StatusUpdateSchema(BaseModel):
    status: ConsultationStatus


class RoomMessageCreate(BaseModel):
    content: str = Field(..., max_length=2000)


class RoomResponse(BaseModel):
    consultation_id: str = Field(..., alias="consultationId")
    status: RoomStatus
    lawyer_name: str = Field(..., alias="lawyerName")
    messages: List[RoomMessage]

    model_config = ConfigDict(populate_by_name=True)
