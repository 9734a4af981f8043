"""
FastAPI dependency injection for authentication and roles
"""

import logging
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError

from lawconsult.utils.security import verify_access_token
from lawconsult.services.auth_service import auth_service
from lawconsult.models.user import User, UserRole

logger = logging.getLogger(__name__)

# Security scheme for JWT Bearer tokens
security = HTTPBearer()
# optional bearer that doesn't raise when missing
security_optional = HTTPBearer(auto_error=False)


async def _user_from_token(token: str) -> User:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = verify_access_token(token)
    except JWTError as e:
        logger.debug("Access token rejected: %s", e)
        raise credentials_exception

    user_id = payload.get("sub")
    if not user_id:
        raise credentials_exception

    user = await auth_service.get_current_user(user_id)
    if user is None or not user.is_active:
        raise credentials_exception
    return user


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> User:
    """
    Dependency to get the current authenticated user from JWT token

    Raises:
        HTTPException: If token is invalid, user not found or disabled
    """
    return await _user_from_token(credentials.credentials)


async def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(
        security_optional),
) -> Optional[User]:
    """Current user if a valid token was sent, None otherwise."""
    if not credentials:
        return None
    try:
        return await _user_from_token(credentials.credentials)
    except HTTPException:
        return None


def require_roles(*roles: UserRole):
    """
    Dependency factory to require one of multiple roles

    Args:
        roles: Tuple of acceptable roles

    Returns:
        Dependency function
    """

    async def roles_checker(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role not in roles:
            roles_str = ", ".join([role.value for role in roles])
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Insufficient permissions. Required roles: {roles_str}",
            )
        return current_user

    return roles_checker


async def require_admin(
    current_user: User = Depends(require_roles(UserRole.ADMIN)),
) -> User:
    """Require user to be an admin"""
    return current_user
