# app/models/user.py
from sqlalchemy import Column, String, Boolean, DateTime, func, Enum
import enum
from models.base import Base, new_id


class UserRole(str, enum.Enum):
    USER = "user"
    ADMIN = "admin"


class User(Base):
    __tablename__ = "users"

    # ---------- identity ----------
    id = Column(String(36), primary_key=True, default=new_id)
    email = Column(String(255), unique=True, index=True, nullable=False)

    # ---------- auth ----------
    hashed_password = Column(String(255), nullable=False)
    role = Column(
        Enum("user", "admin", name="user_role"),
        default=UserRole.USER.value,
        nullable=False
    )
    is_verified = Column(Boolean, default=False, nullable=False)

    # sha256 of the emailed token, never the raw token
    reset_password_token = Column(String(64), nullable=True, index=True)
    reset_password_expires = Column(DateTime(timezone=True), nullable=True)

    # ---------- profile ----------
    full_name = Column(String(200), nullable=False)
    avatar_url = Column(String(500), nullable=True)

    # ---------- timestamps ----------
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value
