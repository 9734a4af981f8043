"""
Consultation Models for LawConsult Backend

This module defines the Consultation model, its status lifecycle and the
per-type pricing rules used when a client books a lawyer.
"""

from datetime import datetime, timezone
from typing import Optional
from enum import Enum
from pydantic import BaseModel, Field, ConfigDict

from lawconsult.models.payment import PaymentMethod


def utc_now():
    """Get current UTC datetime (timezone-aware)"""
    return datetime.now(timezone.utc)


class ConsultationType(str, Enum):
    """Channel the consultation is held on"""

    TEXT = "text"
    PHONE = "phone"
    VIDEO = "video"


class ConsultationStatus(str, Enum):
    """Consultation status enumeration"""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class InvalidTransitionError(ValueError):
    """Raised when a consultation is moved to a status it cannot reach."""

    def __init__(self, current: ConsultationStatus, target: ConsultationStatus):
        self.current = ConsultationStatus(current)
        self.target = ConsultationStatus(target)
        super().__init__(
            f"Cannot change consultation status from {self.current.value} to {self.target.value}"
        )


ALLOWED_TRANSITIONS = {
    ConsultationStatus.PENDING: {ConsultationStatus.CONFIRMED, ConsultationStatus.CANCELLED},
    ConsultationStatus.CONFIRMED: {ConsultationStatus.COMPLETED, ConsultationStatus.CANCELLED},
    ConsultationStatus.COMPLETED: set(),
    ConsultationStatus.CANCELLED: set(),
}


def check_transition(current, target) -> ConsultationStatus:
    """Validate a status change and return the target status.

    Raises:
        InvalidTransitionError: If ``target`` is not reachable from ``current``
    """
    current = ConsultationStatus(current)
    target = ConsultationStatus(target)
    if target not in ALLOWED_TRANSITIONS[current]:
        raise InvalidTransitionError(current, target)
    return target


class ConsultationPricing(BaseModel):
    title: str
    price_multiplier: float = Field(alias="priceMultiplier")
    duration: int = Field(description="Minutes; 0 for asynchronous text replies")
    duration_label: str = Field(alias="durationLabel")

    model_config = ConfigDict(populate_by_name=True)


PRICING = {
    ConsultationType.TEXT: ConsultationPricing(
        title="Text consultation", price_multiplier=0.5, duration=0,
        duration_label="Reply within 24 hours"),
    ConsultationType.PHONE: ConsultationPricing(
        title="Phone consultation", price_multiplier=0.8, duration=30,
        duration_label="30 minutes"),
    ConsultationType.VIDEO: ConsultationPricing(
        title="Video consultation", price_multiplier=1.0, duration=60,
        duration_label="60 minutes"),
}


def consultation_fee(hourly_rate: float, consultation_type) -> int:
    """Fee charged for one consultation of the given type."""
    pricing = PRICING[ConsultationType(consultation_type)]
    return round(hourly_rate * pricing.price_multiplier)


class Consultation(BaseModel):
    """
    Consultation booked by a client with a lawyer

    Collection: consultations/
    Document ID: consultation id
    """

    id: str
    lawyer_id: str = Field(..., alias="lawyerId")
    client_id: str = Field(..., alias="clientId")
    type: ConsultationType = ConsultationType.TEXT
    status: ConsultationStatus = ConsultationStatus.PENDING
    scheduled_at: Optional[datetime] = Field(None, alias="scheduledAt")
    duration: int = Field(default=0, ge=0, description="Minutes")
    fee: float = Field(default=0.0, ge=0)
    amount: float = Field(default=0.0, ge=0)
    description: str = ""
    payment_method: PaymentMethod = Field(default=PaymentMethod.WECHAT, alias="paymentMethod")
    created_at: datetime = Field(default_factory=utc_now, alias="createdAt")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")

    model_config = ConfigDict(populate_by_name=True)


def firestore_consultation_to_model(doc: dict, consultation_id: str) -> Consultation:
    return Consultation(
        id=consultation_id,
        lawyer_id=doc.get("lawyerId", ""),
        client_id=doc.get("clientId", ""),
        type=doc.get("type") or ConsultationType.TEXT,
        status=doc.get("status") or ConsultationStatus.PENDING,
        scheduled_at=doc.get("scheduledAt"),
        duration=doc.get("duration") or 0,
        fee=doc.get("fee") or 0.0,
        amount=doc.get("amount") or doc.get("fee") or 0.0,
        description=doc.get("description") or "",
        payment_method=doc.get("paymentMethod") or PaymentMethod.WECHAT,
        created_at=doc.get("createdAt") or utc_now(),
        updated_at=doc.get("updatedAt"),
    )


def consultation_model_to_firestore(consultation: Consultation) -> dict:
    data = consultation.model_dump(by_alias=True, mode="python")
    data.pop("id", None)
    data["type"] = consultation.type.value
    data["status"] = consultation.status.value
    data["paymentMethod"] = consultation.payment_method.value
    return data
