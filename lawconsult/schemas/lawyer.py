"""
Schemas for the lawyer directory endpoints
"""

from pydantic import BaseModel, Field, ConfigDict
from typing import List
from datetime import date

from lawconsult.models.lawyer import Lawyer, LawyerFilters, SortDirection, SortOption
from lawconsult.models.review import Review


class LawyerListResponse(BaseModel):
    lawyers: List[Lawyer]
    total: int
    page: int
    page_size: int = Field(..., alias="pageSize")
    filters: LawyerFilters
    sort_by: SortOption = Field(..., alias="sortBy")
    sort_direction: SortDirection = Field(..., alias="sortDirection")

    model_config = ConfigDict(populate_by_name=True)


class DirectoryOptions(BaseModel):
    specialties: List[str]
    locations: List[str]


class ReviewCreate(BaseModel):
    consultation_id: str = Field(..., alias="consultationId")
    rating: int = Field(..., ge=1, le=5)
    comment: str = Field(default="", max_length=1000)

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {"consultationId": "cons1", "rating": 5, "comment": "Very professional"}
        },
    )


class ReviewListResponse(BaseModel):
    reviews: List[Review]
    total: int


class SlotResponse(BaseModel):
    time: str
    available: bool


class SlotsResponse(BaseModel):
    dates: List[date]
    slots: List[SlotResponse]
