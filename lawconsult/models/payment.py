from pydantic import BaseModel, Field, ConfigDict
from enum import Enum
from typing import Optional
from datetime import datetime, timezone


def utc_now():
    return datetime.now(timezone.utc)


class PaymentMethod(str, Enum):
    WECHAT = "wechat"
    ALIPAY = "alipay"
    CARD = "card"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"
    REFUNDED = "refunded"


class PaymentOrder(BaseModel):
    """
    Payment order for a consultation

    Collection: payments/
    """

    id: str
    consultation_id: str = Field(..., alias="consultationId")
    client_id: str = Field(..., alias="clientId")
    amount: float = Field(..., ge=0)
    status: PaymentStatus = PaymentStatus.PENDING
    payment_method: PaymentMethod = Field(
        default=PaymentMethod.WECHAT, alias="paymentMethod")
    provider_reference: Optional[str] = Field(None, alias="providerReference")
    created_at: datetime = Field(default_factory=utc_now, alias="createdAt")
    paid_at: Optional[datetime] = Field(None, alias="paidAt")

    model_config = ConfigDict(populate_by_name=True)


def firestore_payment_to_model(doc: dict, payment_id: str) -> PaymentOrder:
    return PaymentOrder(
        id=payment_id,
        consultation_id=doc.get("consultationId", ""),
        client_id=doc.get("clientId", ""),
        amount=doc.get("amount") or 0.0,
        status=doc.get("status") or PaymentStatus.PENDING,
        payment_method=doc.get("paymentMethod") or PaymentMethod.WECHAT,
        provider_reference=doc.get("providerReference"),
        created_at=doc.get("createdAt") or utc_now(),
        paid_at=doc.get("paidAt"),
    )


def payment_model_to_firestore(order: PaymentOrder) -> dict:
    data = order.model_dump(by_alias=True)
    data.pop("id", None)
    data["status"] = order.status.value
    data["paymentMethod"] = order.payment_method.value
    return data
