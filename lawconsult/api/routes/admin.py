"""
Admin back-office endpoints

All routes require the ``admin`` role.

Endpoints:
- GET /api/v1/admin/dashboard/stats - platform totals
- GET /api/v1/admin/users, PATCH /api/v1/admin/users/{id}/status
- GET /api/v1/admin/lawyers, PATCH /api/v1/admin/lawyers/{id}/status
- GET /api/v1/admin/consultations
- GET /api/v1/admin/payments
- GET /api/v1/admin/reviews, PATCH /api/v1/admin/reviews/{id}/status
- GET /api/v1/admin/settings, PATCH /api/v1/admin/settings
"""

import logging
from collections import Counter
from datetime import datetime, UTC
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from lawconsult.dependencies import require_admin
from lawconsult.models.consultation import ConsultationStatus, firestore_consultation_to_model
from lawconsult.models.lawyer import Lawyer, firestore_lawyer_to_model
from lawconsult.models.payment import PaymentStatus, firestore_payment_to_model
from lawconsult.models.review import Review, firestore_review_to_model
from lawconsult.models.settings import (
    SETTINGS_PATH,
    SystemSettings,
    firestore_settings_to_model,
    settings_model_to_firestore,
)
from lawconsult.models.user import User, UserRole, firestore_user_to_model
from lawconsult.schemas.admin import (
    ActiveStatusUpdate,
    AdminConsultationList,
    AdminLawyerList,
    AdminPaymentList,
    AdminReviewList,
    AdminUserList,
    DashboardStats,
    ReviewStatusUpdate,
    SettingsUpdate,
)
from lawconsult.schemas.auth import UserResponse
from lawconsult.services.firebase_service import firebase_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/admin", tags=["admin"])


def _page(items: list, page: int, page_size: int) -> list:
    start = (page - 1) * page_size
    return items[start:start + page_size]


@router.get("/dashboard/stats", response_model=DashboardStats)
async def dashboard_stats(current_user: User = Depends(require_admin)):
    """Return basic counts for the dashboard."""
    total_users = await firebase_service.count_collection("users")
    total_lawyers = await firebase_service.count_collection("lawyers")

    consultations = await firebase_service.stream_collection("consultations")
    by_status = Counter(doc.get("status", "unknown") for _, doc in consultations)

    payments = await firebase_service.stream_collection("payments")
    revenue = sum(
        doc.get("amount") or 0
        for _, doc in payments
        if doc.get("status") == PaymentStatus.PAID.value
    )

    return DashboardStats(
        total_users=total_users,
        total_lawyers=total_lawyers,
        total_consultations=len(consultations),
        total_revenue=revenue,
        consultations_by_status=dict(by_status),
    )


@router.get("/users", response_model=AdminUserList)
async def list_users(
    page: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, le=100),
    search: str = "",
    role: Optional[UserRole] = None,
    is_active: Optional[bool] = None,
    current_user: User = Depends(require_admin),
):
    docs = await firebase_service.stream_collection("users")
    users = [firestore_user_to_model(doc, uid) for uid, doc in docs]

    needle = search.strip().lower()
    if needle:
        users = [u for u in users if needle in u.name.lower() or needle in u.email.lower()]
    if role is not None:
        users = [u for u in users if u.role == role.value]
    if is_active is not None:
        users = [u for u in users if u.is_active == is_active]
    users.sort(key=lambda u: u.created_at or datetime.min.replace(tzinfo=UTC), reverse=True)

    return AdminUserList(
        users=[UserResponse(**u.model_dump(by_alias=True)) for u in _page(users, page, page_size)],
        total=len(users),
        page=page,
        page_size=page_size,
    )


@router.patch("/users/{uid}/status", response_model=UserResponse)
async def update_user_status(
    uid: str,
    data: ActiveStatusUpdate,
    current_user: User = Depends(require_admin),
):
    """Enable or disable an account; admins cannot disable themselves."""
    doc = await firebase_service.get_document(f"users/{uid}")
    if not doc:
        raise HTTPException(status_code=404, detail="User not found")
    if uid == current_user.uid and not data.is_active:
        raise HTTPException(status_code=400, detail="Cannot disable your own account")

    await firebase_service.update_document(f"users/{uid}", {"isActive": data.is_active})
    doc["isActive"] = data.is_active
    logger.info("User %s active=%s (%s)", uid, data.is_active, data.reason or "no reason")
    return UserResponse(**firestore_user_to_model(doc, uid).model_dump(by_alias=True))


@router.get("/lawyers", response_model=AdminLawyerList)
async def list_lawyers(
    page: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, le=100),
    search: str = "",
    is_active: Optional[bool] = None,
    current_user: User = Depends(require_admin),
):
    docs = await firebase_service.stream_collection("lawyers")
    lawyers = [firestore_lawyer_to_model(doc, lawyer_id) for lawyer_id, doc in docs]

    needle = search.strip().lower()
    if needle:
        lawyers = [lw for lw in lawyers if needle in lw.name.lower()]
    if is_active is not None:
        lawyers = [lw for lw in lawyers if lw.is_active == is_active]
    lawyers.sort(key=lambda lw: lw.id)

    return AdminLawyerList(
        lawyers=_page(lawyers, page, page_size),
        total=len(lawyers),
        page=page,
        page_size=page_size,
    )


@router.patch("/lawyers/{lawyer_id}/status", response_model=Lawyer)
async def update_lawyer_status(
    lawyer_id: str,
    data: ActiveStatusUpdate,
    current_user: User = Depends(require_admin),
):
    """List or unlist a lawyer in the public directory."""
    doc = await firebase_service.get_document(f"lawyers/{lawyer_id}")
    if not doc:
        raise HTTPException(status_code=404, detail="Lawyer not found")

    now = datetime.now(UTC)
    await firebase_service.update_document(
        f"lawyers/{lawyer_id}", {"isActive": data.is_active, "updatedAt": now})
    doc.update({"isActive": data.is_active, "updatedAt": now})
    logger.info("Lawyer %s active=%s (%s)", lawyer_id, data.is_active, data.reason or "no reason")
    return firestore_lawyer_to_model(doc, lawyer_id)


@router.get("/consultations", response_model=AdminConsultationList)
async def list_consultations(
    status: Optional[ConsultationStatus] = None,
    current_user: User = Depends(require_admin),
):
    filters = {"status": status.value} if status is not None else None
    docs, _ = await firebase_service.query_collection("consultations", filters=filters)
    consultations = [firestore_consultation_to_model(doc, doc_id) for doc_id, doc in docs]
    consultations.sort(key=lambda c: c.created_at, reverse=True)
    return AdminConsultationList(consultations=consultations, total=len(consultations))


@router.get("/payments", response_model=AdminPaymentList)
async def list_payments(
    status: Optional[PaymentStatus] = None,
    current_user: User = Depends(require_admin),
):
    filters = {"status": status.value} if status is not None else None
    docs, _ = await firebase_service.query_collection("payments", filters=filters)
    payments = [firestore_payment_to_model(doc, doc_id) for doc_id, doc in docs]
    payments.sort(key=lambda p: p.created_at, reverse=True)
    total_paid = sum(p.amount for p in payments if p.status == PaymentStatus.PAID)
    return AdminPaymentList(payments=payments, total=len(payments), total_paid=total_paid)


@router.get("/reviews", response_model=AdminReviewList)
async def list_reviews(current_user: User = Depends(require_admin)):
    docs = await firebase_service.stream_collection("reviews")
    reviews = [firestore_review_to_model(doc, doc_id) for doc_id, doc in docs]
    reviews.sort(key=lambda r: r.created_at, reverse=True)
    return AdminReviewList(reviews=reviews, total=len(reviews))


@router.patch("/reviews/{review_id}/status", response_model=Review)
async def update_review_status(
    review_id: str,
    data: ReviewStatusUpdate,
    current_user: User = Depends(require_admin),
):
    """Hide or restore a review; hidden reviews drop out of the public listing."""
    doc = await firebase_service.get_document(f"reviews/{review_id}")
    if not doc:
        raise HTTPException(status_code=404, detail="Review not found")
    await firebase_service.update_document(f"reviews/{review_id}", {"status": data.status.value})
    doc["status"] = data.status.value
    return firestore_review_to_model(doc, review_id)


async def _load_settings() -> SystemSettings:
    return firestore_settings_to_model(await firebase_service.get_document(SETTINGS_PATH))


@router.get("/settings", response_model=SystemSettings)
async def get_settings(current_user: User = Depends(require_admin)):
    return await _load_settings()


@router.patch("/settings", response_model=SystemSettings)
async def update_settings(
    data: SettingsUpdate,
    current_user: User = Depends(require_admin),
):
    """Merge the given fields into the stored settings."""
    current = await _load_settings()
    changes = data.model_dump(exclude_none=True)
    updated = current.with_changes(changes)
    await firebase_service.set_document(SETTINGS_PATH, settings_model_to_firestore(updated))
    logger.info("System settings updated by %s: %s", current_user.uid, sorted(changes))
    return updated
