# app/schemas/user.py
from pydantic import BaseModel, EmailStr, constr, validator
from typing import Optional
from datetime import datetime
from enum import Enum


class Role(str, Enum):
    USER = "user"
    ADMIN = "admin"


def _normalize_email(v):
    return v.strip().lower() if isinstance(v, str) else v


def _check_password(v):
    if len(v) < 6:
        raise ValueError("Password must be at least 6 characters")
    return v


def _clean_full_name(v):
    v = (v or "").strip()
    if not v:
        raise ValueError("Full name is required")
    if len(v) < 2:
        raise ValueError("Full name must be at least 2 characters")
    return v


# ---------- signup ----------
class UserCreate(BaseModel):
    email: EmailStr
    password: str
    full_name: str

    @validator('password')
    def validate_password(cls, v):
        return _check_password(v)

    @validator('email', pre=True)
    def normalize_email(cls, v):
        return _normalize_email(v)

    @validator('full_name')
    def validate_full_name(cls, v):
        return _clean_full_name(v)

    class Config:
        json_schema_extra = {
            "example": {
                "email": "user@example.com",
                "password": "secret123",
                "full_name": "Jane Doe"
            }
        }


class AdminUserCreate(UserCreate):
    """Admin created accounts default to the admin role."""
    role: Role = Role.ADMIN


class RoleUpdate(BaseModel):
    role: Role


# ---------- login ----------
class UserLogin(BaseModel):
    email: EmailStr
    password: constr(min_length=1)

    @validator('email', pre=True)
    def normalize_email(cls, v):
        return _normalize_email(v)


# ---------- output ----------
class ProfileRead(BaseModel):
    id: str
    email: str
    full_name: str
    avatar_url: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class UserRead(ProfileRead):
    role: Role


class TokenResponse(BaseModel):
    token: str
    user: UserRead
    message: Optional[str] = None


# ---------- profile ----------
class ProfileUpdate(BaseModel):
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None

    @validator('full_name')
    def validate_full_name(cls, v):
        if v is None:
            return v
        v = v.strip()
        if len(v) < 2:
            raise ValueError("Full name must be at least 2 characters")
        return v

    @validator('avatar_url')
    def validate_avatar_url(cls, v):
        if v and not v.startswith(("http://", "https://")):
            raise ValueError("Avatar URL must be a valid URL")
        return v


# ---------- password reset ----------
class PasswordResetRequest(BaseModel):
    email: EmailStr

    @validator('email', pre=True)
    def normalize_email(cls, v):
        return _normalize_email(v)


class PasswordResetConfirm(BaseModel):
    token: constr(min_length=1)
    password: str

    @validator('password')
    def validate_password(cls, v):
        return _check_password(v)


class PasswordResetResponse(BaseModel):
    message: str
    # development only
    resetToken: Optional[str] = None
    resetUrl: Optional[str] = None


class MessageResponse(BaseModel):
    message: str
