# app/models/donation_reason.py
from sqlalchemy import Column, String, Boolean, DateTime, func
from models.base import Base, new_id


class DonationReason(Base):
    __tablename__ = "donation_reasons"

    id = Column(String(36), primary_key=True, default=new_id)
    title = Column(String(100), nullable=False)
    description = Column(String(500), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
