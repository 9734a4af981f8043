"""
Authentication service handling login and registration
"""

import logging
from datetime import datetime, UTC
from typing import Dict, Any, Optional
from uuid import uuid4

from lawconsult.services.firebase_service import firebase_service
from lawconsult.utils.security import (
    create_token_response,
    hash_password,
    verify_password,
)
from lawconsult.models.user import (
    User,
    firestore_user_to_model,
    user_model_to_firestore,
)
from lawconsult.models.settings import SETTINGS_PATH, firestore_settings_to_model
from lawconsult.schemas.auth import UserRegister, UserLogin

logger = logging.getLogger(__name__)


class AuthService:
    """Service for authentication operations"""

    def __init__(self):
        self.firebase = firebase_service

    async def get_user_by_email(self, email: str) -> Optional[User]:
        docs, _ = await self.firebase.query_collection(
            "users", filters={"email": email}, limit=1
        )
        if not docs:
            return None
        uid, data = docs[0]
        return firestore_user_to_model(data, uid)

    async def get_current_user(self, uid: str) -> Optional[User]:
        doc = await self.firebase.get_document(f"users/{uid}")
        if not doc:
            return None
        return firestore_user_to_model(doc, uid)

    async def register_user(self, user_data: UserRegister) -> Dict[str, Any]:
        """
        Register a new account

        Returns:
            Dictionary containing user and tokens

        Raises:
            ValueError: If registration is closed or the email already exists
        """
        config = firestore_settings_to_model(await self.firebase.get_document(SETTINGS_PATH))
        if not config.allow_registration:
            raise ValueError("Registration is currently closed")

        if await self.get_user_by_email(user_data.email):
            raise ValueError("Email already registered")

        user = User(
            uid=uuid4().hex,
            name=user_data.name,
            email=user_data.email,
            phone=user_data.phone,
            role=user_data.role,
            password_hash=hash_password(user_data.password),
        )
        await self.firebase.set_document(f"users/{user.uid}", user_model_to_firestore(user))
        logger.info("Registered %s account %s", user.role, user.uid)

        tokens = create_token_response(user.uid, user.email, user.role)
        return {"user": user, "tokens": tokens}

    async def login_user(self, credentials: UserLogin) -> Dict[str, Any]:
        """
        Authenticate with email and password

        Raises:
            ValueError: If the credentials are wrong or the account is disabled
        """
        user = await self.get_user_by_email(credentials.email)
        if user is None or not user.password_hash or not verify_password(
            credentials.password, user.password_hash
        ):
            raise ValueError("Invalid email or password")
        if not user.is_active:
            raise ValueError("Account is disabled")

        user.last_login = datetime.now(UTC)
        await self.firebase.update_document(f"users/{user.uid}", {"lastLogin": user.last_login})

        tokens = create_token_response(user.uid, user.email, user.role)
        return {"user": user, "tokens": tokens}


# Global auth service instance
auth_service = AuthService()
