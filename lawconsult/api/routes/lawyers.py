"""
Lawyer directory endpoints

Endpoints:
- GET /api/v1/lawyers - search, filter, sort and page the directory
- GET /api/v1/lawyers/options - specialty and location choices
- GET /api/v1/lawyers/{id} - lawyer profile
- GET /api/v1/lawyers/{id}/reviews - visible reviews for a lawyer
- POST /api/v1/lawyers/{id}/reviews - add a review (authenticated)
- GET /api/v1/lawyers/{id}/slots - bookable dates and time slots
"""

import logging
from datetime import datetime, UTC
from typing import List, Optional, Tuple
from uuid import uuid4

from fastapi import APIRouter, Depends, HTTPException, Query

from lawconsult.data.sample_data import LOCATION_OPTIONS, SPECIALTY_OPTIONS
from lawconsult.dependencies import get_current_user
from lawconsult.models.consultation import ConsultationStatus
from lawconsult.models.lawyer import (
    Lawyer,
    LawyerFilters,
    SortDirection,
    SortOption,
    firestore_lawyer_to_model,
)
from lawconsult.models.review import (
    Review,
    ReviewStatus,
    add_rating,
    firestore_review_to_model,
    review_model_to_firestore,
)
from lawconsult.models.user import User
from lawconsult.schemas.lawyer import (
    DirectoryOptions,
    LawyerListResponse,
    ReviewCreate,
    ReviewListResponse,
    SlotResponse,
    SlotsResponse,
)
from lawconsult.services.booking_flow import TIME_SLOTS, booking_dates
from lawconsult.services.directory import DirectoryStore
from lawconsult.services.firebase_service import firebase_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/lawyers", tags=["lawyers"])


async def load_directory() -> List[Lawyer]:
    """All listed (active) lawyers; malformed documents are skipped."""
    docs, _ = await firebase_service.query_collection("lawyers")
    lawyers = []
    for doc_id, doc in docs:
        try:
            lawyer = firestore_lawyer_to_model(doc, doc_id)
        except ValueError as e:
            logger.warning("Skipping malformed lawyer %s: %s", doc_id, e)
            continue
        if lawyer.is_active:
            lawyers.append(lawyer)
    return lawyers


async def get_listed_lawyer(lawyer_id: str) -> Lawyer:
    doc = await firebase_service.get_document(f"lawyers/{lawyer_id}")
    if not doc:
        raise HTTPException(status_code=404, detail="Lawyer not found")
    lawyer = firestore_lawyer_to_model(doc, lawyer_id)
    if not lawyer.is_active:
        raise HTTPException(status_code=404, detail="Lawyer not found")
    return lawyer


RANGE_FIELDS = {
    "experience_range": lambda lawyer: lawyer.experience,
    "rating_range": lambda lawyer: lawyer.rating,
    "price_range": lambda lawyer: lawyer.hourly_rate,
}


def _widest_range(lawyers: List[Lawyer], name: str, defaults: LawyerFilters) -> Tuple:
    """The default range for ``name`` stretched to cover every listed lawyer."""
    low, high = getattr(defaults, name)
    values = [RANGE_FIELDS[name](lawyer) for lawyer in lawyers]
    if values:
        low, high = min(low, min(values)), max(high, max(values))
    return low, high


@router.get("", response_model=LawyerListResponse)
async def list_lawyers(
    q: str = Query("", description="Matches name or any specialty"),
    specialties: Optional[List[str]] = Query(None),
    min_experience: Optional[int] = Query(None, ge=0),
    max_experience: Optional[int] = Query(None, ge=0),
    min_rating: Optional[float] = Query(None, ge=0, le=5),
    max_rating: Optional[float] = Query(None, ge=0, le=5),
    min_price: Optional[float] = Query(None, ge=0),
    max_price: Optional[float] = Query(None, ge=0),
    location: Optional[str] = None,
    is_online: Optional[bool] = None,
    sort_by: SortOption = SortOption.RATING,
    sort_direction: SortDirection = SortDirection.DESC,
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
):
    lawyers = await load_directory()
    store = DirectoryStore(lawyers)

    # Missing bounds are open-ended
    changes = {}
    for name, low, high in (
        ("experience_range", min_experience, max_experience),
        ("rating_range", min_rating, max_rating),
        ("price_range", min_price, max_price),
    ):
        widest = _widest_range(lawyers, name, store.filters)
        changes[name] = (
            widest[0] if low is None else low,
            widest[1] if high is None else high,
        )
    if specialties is not None:
        changes["specialties"] = specialties
    if location is not None:
        changes["location"] = location
    if is_online is not None:
        changes["is_online"] = is_online

    store.set_filters(changes)
    store.set_sort(sort_by, sort_direction)
    store.set_search(q)

    start = (page - 1) * page_size
    return LawyerListResponse(
        lawyers=store.visible[start:start + page_size],
        total=len(store.visible),
        page=page,
        page_size=page_size,
        filters=store.filters,
        sort_by=store.sort_by,
        sort_direction=store.direction,
    )


@router.get("/options", response_model=DirectoryOptions)
async def directory_options():
    return DirectoryOptions(specialties=SPECIALTY_OPTIONS, locations=LOCATION_OPTIONS)


@router.get("/{lawyer_id}", response_model=Lawyer)
async def get_lawyer(lawyer_id: str):
    return await get_listed_lawyer(lawyer_id)


@router.get("/{lawyer_id}/reviews", response_model=ReviewListResponse)
async def list_reviews(lawyer_id: str):
    docs, _ = await firebase_service.query_collection(
        "reviews", filters={"lawyerId": lawyer_id}
    )
    reviews = [firestore_review_to_model(doc, doc_id) for doc_id, doc in docs]
    reviews = [r for r in reviews if r.status == ReviewStatus.VISIBLE]
    reviews.sort(key=lambda r: r.created_at, reverse=True)
    return ReviewListResponse(reviews=reviews, total=len(reviews))


@router.post("/{lawyer_id}/reviews", response_model=Review, status_code=201)
async def add_review(
    lawyer_id: str,
    data: ReviewCreate,
    current_user: User = Depends(get_current_user),
):
    """
    Append a review and fold its rating into the lawyer's average.

    The referenced consultation must be the caller's completed consultation
    with this lawyer. A client reviews each lawyer once.
    """
    lawyer = await get_listed_lawyer(lawyer_id)

    consultation = await firebase_service.get_document(
        f"consultations/{data.consultation_id}")
    if (
        not consultation
        or consultation.get("clientId") != current_user.uid
        or consultation.get("lawyerId") != lawyer_id
    ):
        raise HTTPException(status_code=400, detail="Consultation does not match this review")
    if consultation.get("status") != ConsultationStatus.COMPLETED.value:
        raise HTTPException(
            status_code=400, detail="Only completed consultations can be reviewed")

    existing, _ = await firebase_service.query_collection(
        "reviews", filters={"lawyerId": lawyer_id, "clientId": current_user.uid}, limit=1
    )
    if existing:
        raise HTTPException(status_code=409, detail="You have already reviewed this lawyer")

    review = Review(
        id=uuid4().hex,
        lawyer_id=lawyer_id,
        client_id=current_user.uid,
        consultation_id=data.consultation_id,
        rating=data.rating,
        comment=data.comment,
        client_name=current_user.name,
        client_avatar=current_user.avatar,
    )
    await firebase_service.set_document(f"reviews/{review.id}", review_model_to_firestore(review))

    rating, review_count = add_rating(lawyer.rating, lawyer.review_count, review.rating)
    await firebase_service.update_document(
        f"lawyers/{lawyer_id}",
        {"rating": rating, "reviewCount": review_count, "updatedAt": datetime.now(UTC)},
    )
    logger.info("Review %s added for lawyer %s", review.id, lawyer_id)
    return review


@router.get("/{lawyer_id}/slots", response_model=SlotsResponse)
async def list_slots(lawyer_id: str):
    await get_listed_lawyer(lawyer_id)
    return SlotsResponse(
        dates=booking_dates(),
        slots=[SlotResponse(time=s.time, available=s.available) for s in TIME_SLOTS],
    )
