# app/services/auth_service.py
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional, Dict

from sqlalchemy.ext.asyncio import AsyncSession

from core.config import settings
from core.exceptions import AuthenticationError, AuthorizationError, ConflictError, ValidationError
from core.security import (
    hash_password, verify_password, create_access_token,
    generate_reset_token, hash_reset_token,
)
from core.store import DocumentStore
from models.user import User, UserRole
from schemas.user import TokenResponse, UserRead, PasswordResetResponse
from services.activity_log_service import ActivityLogService

logger = logging.getLogger(__name__)

RESET_MESSAGE = "If an account with that email exists, a password reset link has been sent."


class AuthService:
    def __init__(self, db: AsyncSession, request_meta: Optional[Dict] = None):
        self.db = db
        self.store = DocumentStore(db)
        self.request_meta = request_meta or {}

    # ------------------------------------------------
    # REGISTER
    # ------------------------------------------------
    async def register_user(
        self,
        email: str,
        password: str,
        full_name: str,
        role: str = UserRole.USER.value,
        is_verified: bool = False,
    ) -> User:
        email = email.lower()

        # duplicate check
        if await self.store.find_one(User, email=email):
            raise ConflictError("User with this email already exists")

        user = await self.store.create(
            User,
            email=email,
            hashed_password=hash_password(password),
            full_name=full_name,
            role=role,
            is_verified=is_verified,
        )

        await ActivityLogService(self.db).record(
            "SIGNUP", "users", user.id, user=user, **self.request_meta
        )
        logger.info(f"User registered: {user.id} ({role})")
        return user

    async def create_first_admin(self, email: str, password: str, full_name: str) -> User:
        """Bootstrap: only allowed while no admin exists."""
        if await self.store.find_one(User, role=UserRole.ADMIN.value):
            raise AuthorizationError(
                "An admin user already exists. Please login or contact the system administrator."
            )
        return await self.register_user(
            email, password, full_name, role=UserRole.ADMIN.value, is_verified=True
        )

    # ------------------------------------------------
    # LOGIN
    # ------------------------------------------------
    async def authenticate_user(self, email: str, password: str) -> User:
        user = await self.store.find_one(User, email=email.lower())

        if not user or not verify_password(password, user.hashed_password):
            raise AuthenticationError("Invalid email or password")

        return user

    # ------------------------------------------------
    # TOKEN
    # ------------------------------------------------
    @staticmethod
    def create_token(user: User, message: str = None) -> TokenResponse:
        access = create_access_token(subject=user.id, extra_data={"role": user.role})
        return TokenResponse(token=access, user=UserRead.model_validate(user), message=message)

    # ------------------------------------------------
    # PASSWORD RESET
    # ------------------------------------------------
    async def request_password_reset(self, email: str) -> PasswordResetResponse:
        user = await self.store.find_one(User, email=email.lower())
        if not user:
            # same answer whether or not the account exists
            return PasswordResetResponse(message=RESET_MESSAGE)

        token, token_hash = generate_reset_token()
        await self.store.update_by_id(User, user.id, {
            "reset_password_token": token_hash,
            "reset_password_expires": datetime.now(timezone.utc) + timedelta(
                minutes=settings.PASSWORD_RESET_EXPIRE_MINUTES
            ),
        })

        reset_url = f"{settings.FRONTEND_URL}/reset-password?token={token}"
        # TODO: hand reset_url to an email sender instead of logging it
        logger.info(f"Password reset requested for {user.id}: {reset_url}")

        if settings.is_development:
            return PasswordResetResponse(message=RESET_MESSAGE, resetToken=token, resetUrl=reset_url)
        return PasswordResetResponse(message=RESET_MESSAGE)

    async def reset_password(self, token: str, new_password: str) -> None:
        user = await self.store.find_one(User, reset_password_token=hash_reset_token(token))

        if not user or not user.reset_password_expires or self._is_expired(user.reset_password_expires):
            raise ValidationError("Invalid or expired reset token")

        await self.store.update_by_id(User, user.id, {
            "hashed_password": hash_password(new_password),
            "reset_password_token": None,
            "reset_password_expires": None,
        })
        await ActivityLogService(self.db).record(
            "RESET_PASSWORD", "users", user.id, user=user, **self.request_meta
        )

    @staticmethod
    def _is_expired(expires: datetime) -> bool:
        # sqlite hands back naive UTC datetimes
        if expires.tzinfo is None:
            expires = expires.replace(tzinfo=timezone.utc)
        return expires <= datetime.now(timezone.utc)
