# app/api/v1/endpoints/auth.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from core.database import get_db
from core.dependencies import get_request_meta
from core.permissions import get_current_user
from models.user import User
from schemas.user import (
    UserCreate, UserLogin, UserRead, TokenResponse,
    PasswordResetRequest, PasswordResetConfirm, PasswordResetResponse, MessageResponse,
)
from services.auth_service import AuthService

router = APIRouter()


@router.post("/signup", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def signup(
        user_data: UserCreate,
        db: AsyncSession = Depends(get_db),
        meta: dict = Depends(get_request_meta),
):
    service = AuthService(db, meta)
    user = await service.register_user(
        email=user_data.email,
        password=user_data.password,
        full_name=user_data.full_name,
    )
    return service.create_token(user)


@router.post("/login", response_model=TokenResponse)
async def login(data: UserLogin, db: AsyncSession = Depends(get_db)):
    service = AuthService(db)
    user = await service.authenticate_user(email=data.email, password=data.password)
    return service.create_token(user)


@router.get("/me", response_model=UserRead)
async def me(current_user: User = Depends(get_current_user)):
    return current_user


# ---------- password reset ----------
@router.post("/forgot-password", response_model=PasswordResetResponse, response_model_exclude_none=True)
async def forgot_password(data: PasswordResetRequest, db: AsyncSession = Depends(get_db)):
    return await AuthService(db).request_password_reset(data.email)


@router.post("/reset-password", response_model=MessageResponse)
async def reset_password(
        data: PasswordResetConfirm,
        db: AsyncSession = Depends(get_db),
        meta: dict = Depends(get_request_meta),
):
    await AuthService(db, meta).reset_password(data.token, data.password)
    return MessageResponse(message="Password has been reset successfully. You can now login with your new password.")


# ---------- bootstrap ----------
@router.post("/create-first-admin", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def create_first_admin(
        user_data: UserCreate,
        db: AsyncSession = Depends(get_db),
        meta: dict = Depends(get_request_meta),
):
    """Only works while the system has no admin yet."""
    service = AuthService(db, meta)
    user = await service.create_first_admin(
        email=user_data.email,
        password=user_data.password,
        full_name=user_data.full_name,
    )
    return service.create_token(user, message="First admin user created successfully")
