"""
Authentication request/response schemas
"""

from pydantic import BaseModel, EmailStr, Field, field_validator, ConfigDict
from typing import Literal, Optional
from datetime import datetime


class UserRegister(BaseModel):
    """Schema for user registration"""

    email: EmailStr
    password: str = Field(
        ..., min_length=8, description="Password must be at least 8 characters"
    )
    name: str = Field(..., min_length=1, max_length=100)
    phone: Optional[str] = None
    role: Literal["client", "lawyer"] = "client"

    @field_validator("password")
    def validate_password(cls, v):
        """Validate password strength"""
        if not any(char.isdigit() for char in v):
            raise ValueError("Password must contain at least one digit")
        if not any(char.isalpha() for char in v):
            raise ValueError("Password must contain at least one letter")
        return v

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "zhangsan@example.com",
                "password": "SecurePass123",
                "name": "Zhang San",
                "phone": "13800138000",
                "role": "client",
            }
        }
    )


class UserLogin(BaseModel):
    """Schema for user login"""

    email: EmailStr
    password: str


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int


class UserResponse(BaseModel):
    """Public view of an account; the password hash is never included"""

    uid: str
    name: str
    email: EmailStr
    phone: Optional[str] = None
    avatar: Optional[str] = None
    role: str
    is_active: bool = Field(alias="isActive")
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    last_login: Optional[datetime] = Field(None, alias="lastLogin")

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)


class AuthResponse(BaseModel):
    user: UserResponse
    tokens: Token
