# app/schemas/communication_method.py
from pydantic import BaseModel, Field, validator
from typing import Optional
from datetime import datetime
from enum import Enum


class CommunicationMethodType(str, Enum):
    EMAIL = "email"
    TELEGRAM = "telegram"
    WHATSAPP = "whatsapp"
    PHONE = "phone"
    OTHER = "other"


class CommunicationMethodCreate(BaseModel):
    name: str = Field(..., max_length=50)
    type: CommunicationMethodType
    value: str
    icon: Optional[str] = None
    order: int = 0

    @validator('name', 'value')
    def not_blank(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("Name and value are required")
        return v


class CommunicationMethodUpdate(BaseModel):
    name: Optional[str] = Field(None, max_length=50)
    type: Optional[CommunicationMethodType] = None
    value: Optional[str] = None
    icon: Optional[str] = None
    is_active: Optional[bool] = None
    order: Optional[int] = None

    @validator('name', 'value')
    def not_blank(cls, v):
        if v is not None and not v.strip():
            raise ValueError("Name and value cannot be empty")
        return v.strip() if v else v


class CommunicationMethodRead(BaseModel):
    id: str
    name: str
    type: CommunicationMethodType
    value: str
    icon: Optional[str] = None
    is_active: bool
    order: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
