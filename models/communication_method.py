# app/models/communication_method.py
from sqlalchemy import Column, Integer, String, Boolean, DateTime, func, Enum
import enum
from models.base import Base, new_id


class CommunicationMethodType(str, enum.Enum):
    EMAIL = "email"
    TELEGRAM = "telegram"
    WHATSAPP = "whatsapp"
    PHONE = "phone"
    OTHER = "other"


class CommunicationMethod(Base):
    __tablename__ = "communication_methods"

    id = Column(String(36), primary_key=True, default=new_id)

    name = Column(String(50), nullable=False)
    type = Column(
        Enum("email", "telegram", "whatsapp", "phone", "other", name="communication_method_type"),
        nullable=False,
        index=True
    )
    value = Column(String(255), nullable=False)  # address, handle or number
    icon = Column(String(255), nullable=True)

    is_active = Column(Boolean, default=True, nullable=False)
    order = Column(Integer, default=0, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
