"""
Lawyer model, directory query types and Firestore conversion helpers
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional, Tuple
from pydantic import BaseModel, Field, ConfigDict


def utc_now():
    return datetime.now(timezone.utc)


class Lawyer(BaseModel):
    """
    Lawyer profile as listed in the directory

    Collection: lawyers/
    Document ID: lawyer id
    """

    id: str
    name: str
    avatar: Optional[str] = None
    description: str = ""
    education: str = ""
    certifications: list[str] = Field(default_factory=list)
    specialties: list[str] = Field(default_factory=list)
    experience: int = Field(default=0, ge=0, description="Years in practice")
    rating: float = Field(default=0.0, ge=0, le=5)
    review_count: int = Field(default=0, ge=0, alias="reviewCount")
    hourly_rate: float = Field(default=0.0, ge=0, alias="hourlyRate")
    location: str = ""
    response_time: str = Field(default="", alias="responseTime")
    languages: list[str] = Field(default_factory=list)
    is_online: bool = Field(default=False, alias="isOnline")
    success_cases: int = Field(default=0, ge=0, alias="successCases")
    is_active: bool = Field(default=True, alias="isActive")
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")

    model_config = ConfigDict(populate_by_name=True)


class SortOption(str, Enum):
    """Numeric field the directory is ordered by"""

    RATING = "rating"
    PRICE = "price"
    EXPERIENCE = "experience"
    REVIEWS = "reviews"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class LawyerFilters(BaseModel):
    """
    Conjunctive filter set applied to the lawyer directory.

    Ranges are inclusive on both ends. An empty specialty list, an empty
    location and ``is_online=None`` each disable their predicate.
    """

    specialties: list[str] = Field(default_factory=list)
    experience_range: Tuple[int, int] = Field(
        default=(0, 30), alias="experienceRange")
    rating_range: Tuple[float, float] = Field(
        default=(0.0, 5.0), alias="ratingRange")
    price_range: Tuple[float, float] = Field(
        default=(0.0, 1000.0), alias="priceRange")
    location: str = ""
    is_online: Optional[bool] = Field(default=None, alias="isOnline")

    model_config = ConfigDict(populate_by_name=True)

    def merged(self, changes: dict) -> "LawyerFilters":
        """Return a copy with ``changes`` shallow-merged over this filter set.

        Keys may be given by field name or by alias; keys that are absent keep
        their current value.
        """
        data = self.model_dump(by_alias=True)
        for key, value in changes.items():
            field = LawyerFilters.model_fields.get(key)
            alias = field.alias if field is not None and field.alias else key
            data[alias] = value
        return LawyerFilters.model_validate(data)


def firestore_lawyer_to_model(doc: dict, lawyer_id: str) -> Lawyer:
    return Lawyer(
        id=lawyer_id,
        name=doc.get("name") or doc.get("displayName") or "",
        avatar=doc.get("avatar"),
        description=doc.get("description") or doc.get("bio") or "",
        education=doc.get("education") or "",
        certifications=doc.get("certifications", []),
        specialties=doc.get("specialties", []),
        experience=doc.get("experience") or 0,
        rating=doc.get("rating") or 0.0,
        review_count=doc.get("reviewCount") or 0,
        hourly_rate=doc.get("hourlyRate") or 0.0,
        location=doc.get("location") or "",
        response_time=doc.get("responseTime") or "",
        languages=doc.get("languages", []),
        is_online=doc.get("isOnline", False),
        success_cases=doc.get("successCases") or 0,
        is_active=doc.get("isActive", True),
        created_at=doc.get("createdAt"),
        updated_at=doc.get("updatedAt"),
    )


def lawyer_model_to_firestore(lawyer: Lawyer) -> dict:
    data = lawyer.model_dump(by_alias=True)
    data.pop("id", None)
    return data
