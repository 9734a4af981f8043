"""
Schemas for the admin back-office endpoints
"""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field, ConfigDict

from lawconsult.models.consultation import Consultation
from lawconsult.models.lawyer import Lawyer
from lawconsult.models.payment import PaymentOrder
from lawconsult.models.review import Review, ReviewStatus
from lawconsult.schemas.auth import UserResponse


class DashboardStats(BaseModel):
    total_users: int = Field(..., alias="totalUsers")
    total_lawyers: int = Field(..., alias="totalLawyers")
    total_consultations: int = Field(..., alias="totalConsultations")
    total_revenue: float = Field(..., alias="totalRevenue")
    consultations_by_status: Dict[str, int] = Field(
        default_factory=dict, alias="consultationsByStatus")

    model_config = ConfigDict(populate_by_name=True)


class AdminUserList(BaseModel):
    users: List[UserResponse]
    total: int
    page: int
    page_size: int = Field(..., alias="pageSize")

    model_config = ConfigDict(populate_by_name=True)


class AdminLawyerList(BaseModel):
    lawyers: List[Lawyer]
    total: int
    page: int
    page_size: int = Field(..., alias="pageSize")

    model_config = ConfigDict(populate_by_name=True)


class AdminConsultationList(BaseModel):
    consultations: List[Consultation]
    total: int


class AdminPaymentList(BaseModel):
    payments: List[PaymentOrder]
    total: int
    total_paid: float = Field(..., alias="totalPaid")

    model_config = ConfigDict(populate_by_name=True)


class AdminReviewList(BaseModel):
    reviews: List[Review]
    total: int


class ActiveStatusUpdate(BaseModel):
    is_active: bool = Field(..., alias="isActive")
    reason: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)


class ReviewStatusUpdate(BaseModel):
    status: ReviewStatus


class SettingsUpdate(BaseModel):
    site_name: Optional[str] = Field(None, alias="siteName")
    maintenance_mode: Optional[bool] = Field(None, alias="maintenanceMode")
    allow_registration: Optional[bool] = Field(None, alias="allowRegistration")
    commission_rate: Optional[float] = Field(None, ge=0, le=1, alias="commissionRate")
    support_email: Optional[str] = Field(None, alias="supportEmail")
    support_phone: Optional[str] = Field(None, alias="supportPhone")
    extra_config: Optional[Dict[str, Any]] = Field(None, alias="extraConfig")

    model_config = ConfigDict(populate_by_name=True)
