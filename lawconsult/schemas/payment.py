from pydantic import BaseModel, Field, ConfigDict
from typing import List, Optional

from lawconsult.models.payment import PaymentMethod, PaymentOrder


class PaymentCreateSchema(BaseModel):
    consultation_id: str = Field(..., alias="consultationId")
    payment_method: Optional[PaymentMethod] = Field(
        default=None, alias="paymentMethod",
        description="Defaults to the method chosen when booking")

    model_config = ConfigDict(populate_by_name=True)


class PaymentListResponse(BaseModel):
    payments: List[PaymentOrder]
    total: int
