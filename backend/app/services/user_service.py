"""
User Service - registration, login and profile lookup for researchers
"""

from typing import Any, Dict, Optional

from app.core.config import Settings
from app.core.database import RestStore
from app.core.exceptions import (
    InvalidCredentialsError,
    UserExistsError,
    UserNotFoundError,
    ValidationError,
)
from app.core.logging_config import logger
from app.core.security import create_access_token, get_password_hash, verify_password


USERS_TABLE = "research_users"
PROFILE_COLUMNS = ["id", "email", "full_name", "institution", "research_field", "created_at"]


def _public_user(user: Dict[str, Any]) -> Dict[str, Any]:
    return {"id": user["id"], "email": user["email"], "full_name": user.get("full_name")}


class UserService:
    def __init__(self, store: RestStore, settings: Settings):
        self.store = store
        self.settings = settings

    async def register(
        self,
        email: str,
        password: str,
        full_name: str,
        institution: Optional[str] = None,
        research_field: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Create a user and return ``{"user": ..., "token": ...}``"""
        if not email or not password or not full_name:
            raise ValidationError("Email, password, dan nama lengkap wajib diisi")

        email = email.strip().lower()
        existing = await self.store.select(USERS_TABLE, {"email": email}, columns=["id"])
        if existing:
            logger.log_auth_event("register", False, user_email=email, reason="email exists")
            raise UserExistsError()

        user = await self.store.create(USERS_TABLE, {
            "email": email,
            "full_name": full_name,
            "password_hash": get_password_hash(password, rounds=self.settings.BCRYPT_ROUNDS),
            "institution": institution,
            "research_field": research_field,
        })
        logger.log_auth_event("register", True, user_email=email)

        return {
            "user": _public_user(user),
            "token": create_access_token(user["id"], email, self.settings),
        }

    async def login(self, email: str, password: str) -> Dict[str, Any]:
        if not email or not password:
            raise ValidationError("Email dan password wajib diisi")

        email = email.strip().lower()
        rows = await self.store.select(USERS_TABLE, {"email": email})
        user = rows[0] if rows else None

        if user is None or not verify_password(password, user.get("password_hash") or ""):
            logger.log_auth_event("login", False, user_email=email, reason="invalid credentials")
            raise InvalidCredentialsError()

        logger.log_auth_event("login", True, user_email=email)
        return {
            "user": _public_user(user),
            "token": create_access_token(user["id"], email, self.settings),
        }

    async def get_profile(self, user_id: str) -> Dict[str, Any]:
        rows = await self.store.select(USERS_TABLE, {"id": user_id}, columns=PROFILE_COLUMNS)
        if not rows:
            raise UserNotFoundError(user_id)
        return rows[0]
