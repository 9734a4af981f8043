"""
User Models for LawConsult Backend

This module defines the User model that represents account data stored
in Firebase Firestore.
"""

from datetime import datetime, timezone
from typing import Optional
from enum import Enum
from pydantic import BaseModel, EmailStr, Field, ConfigDict


# Helper function for timezone-aware UTC datetime
def utc_now():
    """Get current UTC datetime (timezone-aware)"""
    return datetime.now(timezone.utc)


class UserRole(str, Enum):
    """User role enumeration"""

    CLIENT = "client"
    LAWYER = "lawyer"
    ADMIN = "admin"


class User(BaseModel):
    """
    Complete User model representing an account in Firestore

    Collection: users/
    Document ID: uid
    """

    uid: str = Field(..., description="Unique account identifier")
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    phone: Optional[str] = None
    avatar: Optional[str] = None
    role: UserRole = Field(default=UserRole.CLIENT)
    is_active: bool = Field(
        default=True, description="Whether account is active", alias="isActive")
    password_hash: Optional[str] = Field(
        default=None, description="bcrypt hash, never returned", alias="passwordHash")
    created_at: Optional[datetime] = Field(
        default_factory=utc_now, description="Account creation timestamp", alias="createdAt"
    )
    last_login: Optional[datetime] = Field(
        default=None, description="Last login timestamp", alias="lastLogin"
    )

    model_config = ConfigDict(
        populate_by_name=True,
        use_enum_values=True,
        json_schema_extra={
            "example": {
                "uid": "user1",
                "name": "Zhang San",
                "email": "zhangsan@example.com",
                "phone": "13800138000",
                "role": "client",
                "is_active": True,
                "created_at": "2024-01-01T00:00:00Z",
            }
        }
    )


def firestore_user_to_model(doc: dict, uid: str) -> User:
    return User(
        uid=uid,
        name=doc.get("name") or doc.get("displayName") or "User",
        email=doc.get("email") or f"{uid}@unknown.com",
        phone=doc.get("phone"),
        avatar=doc.get("avatar"),
        role=doc.get("role") or UserRole.CLIENT,
        is_active=doc.get("isActive", True),
        password_hash=doc.get("passwordHash"),
        created_at=doc.get("createdAt"),
        last_login=doc.get("lastLogin"),
    )


def user_model_to_firestore(user: User) -> dict:
    data = user.model_dump(by_alias=True)
    data.pop("uid", None)
    return data
