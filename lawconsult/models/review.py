"""
Review model and Firestore conversion helpers
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict


def utc_now():
    return datetime.now(timezone.utc)


class ReviewStatus(str, Enum):
    VISIBLE = "visible"
    HIDDEN = "hidden"


class Review(BaseModel):
    """
    Client review of a lawyer after a consultation

    Collection: reviews/
    """

    id: str
    lawyer_id: str = Field(..., alias="lawyerId")
    client_id: str = Field(..., alias="clientId")
    consultation_id: Optional[str] = Field(None, alias="consultationId")
    rating: int = Field(..., ge=1, le=5)
    comment: str = ""
    client_name: str = Field(default="", alias="clientName")
    client_avatar: Optional[str] = Field(None, alias="clientAvatar")
    status: ReviewStatus = ReviewStatus.VISIBLE
    created_at: datetime = Field(default_factory=utc_now, alias="createdAt")

    model_config = ConfigDict(populate_by_name=True)


def firestore_review_to_model(doc: dict, review_id: str) -> Review:
    return Review(
        id=review_id,
        lawyer_id=doc.get("lawyerId", ""),
        client_id=doc.get("clientId", ""),
        consultation_id=doc.get("consultationId"),
        rating=doc.get("rating", 5),
        comment=doc.get("comment") or "",
        client_name=doc.get("clientName") or "",
        client_avatar=doc.get("clientAvatar"),
        status=doc.get("status") or ReviewStatus.VISIBLE,
        created_at=doc.get("createdAt") or utc_now(),
    )


def review_model_to_firestore(review: Review) -> dict:
    data = review.model_dump(by_alias=True)
    data.pop("id", None)
    data["status"] = review.status.value
    return data


def add_rating(rating: float, count: int, new_rating: int) -> tuple[float, int]:
    """Fold one new review into a running average (one decimal) and count."""
    total = rating * count + new_rating
    return round(total / (count + 1), 1), count + 1
