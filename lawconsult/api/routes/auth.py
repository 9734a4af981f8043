"""
Authentication API endpoints
"""

from fastapi import APIRouter, HTTPException, status, Depends

from lawconsult.schemas.auth import (
    UserRegister,
    UserLogin,
    Token,
    UserResponse,
    AuthResponse,
)
from lawconsult.services.auth_service import auth_service
from lawconsult.dependencies import get_current_user
from lawconsult.models.user import User

# Create router
router = APIRouter(prefix="/api/v1/auth", tags=["Authentication"])


def _auth_response(result: dict) -> AuthResponse:
    user_response = UserResponse(**result["user"].model_dump(by_alias=True))
    return AuthResponse(user=user_response, tokens=Token(**result["tokens"]))


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(user_data: UserRegister):
    """
    Register a client or lawyer account

    - **email**: unique email address
    - **password**: at least 8 characters with a letter and a digit
    - **role**: ``client`` (default) or ``lawyer``

    Returns user data and an access token
    """
    try:
        result = await auth_service.register_user(user_data)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return _auth_response(result)


@router.post("/login", response_model=AuthResponse)
async def login(credentials: UserLogin):
    """Login with email and password"""
    try:
        result = await auth_service.login_user(credentials)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        )
    return _auth_response(result)


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(current_user: User = Depends(get_current_user)):
    """Get current authenticated user information"""
    return UserResponse(**current_user.model_dump(by_alias=True))
