# app/models/activity_log.py
from sqlalchemy import Column, String, Text, DateTime, func, ForeignKey, JSON
from sqlalchemy.orm import relationship
from models.base import Base, new_id


class ActivityLog(Base):
    __tablename__ = "activity_logs"

    id = Column(String(36), primary_key=True, default=new_id)

    # what happened
    action = Column(String(100), nullable=False, index=True)  # CREATE_DONATION, UPDATE_DONATION_STATUS ...
    resource_type = Column(String(50), nullable=False)
    resource_id = Column(String(36), nullable=True)
    details = Column(JSON, nullable=True)

    # request info
    ip_address = Column(String(45), nullable=True)
    user_agent = Column(Text, nullable=True)

    # actor, optional
    user_id = Column(String(36), ForeignKey("users.id"), nullable=True, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    # Relationships
    user = relationship("User", foreign_keys=[user_id], lazy="selectin")
