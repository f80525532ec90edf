# app/schemas/payment_method.py
from pydantic import BaseModel, Field, validator
from typing import Optional
from datetime import datetime
from enum import Enum


class PaymentMethodType(str, Enum):
    GIFT_CARD = "gift_card"
    BITCOIN = "bitcoin"
    PAYPAL = "paypal"
    OTHER = "other"


def _required_text(v, field_name: str):
    if v is None:
        return v
    v = v.strip()
    if not v:
        raise ValueError(f"{field_name} is required")
    return v


class PaymentMethodCreate(BaseModel):
    name: str = Field(..., max_length=50)
    type: PaymentMethodType
    label: str = Field(..., max_length=100)
    requires_code: bool = False
    requires_receipt: bool = False
    requires_address: bool = False
    requires_email: bool = False
    icon: Optional[str] = None
    description: Optional[str] = Field(None, max_length=500)
    caution_note: Optional[str] = Field(None, max_length=1000)
    receiving_account: Optional[str] = Field(None, max_length=500)
    order: int = Field(0, ge=0)

    @validator('name')
    def validate_name(cls, v):
        return _required_text(v, "Name")

    @validator('label')
    def validate_label(cls, v):
        return _required_text(v, "Label")


class PaymentMethodUpdate(BaseModel):
    name: Optional[str] = Field(None, max_length=50)
    type: Optional[PaymentMethodType] = None
    label: Optional[str] = Field(None, max_length=100)
    requires_code: Optional[bool] = None
    requires_receipt: Optional[bool] = None
    requires_address: Optional[bool] = None
    requires_email: Optional[bool] = None
    icon: Optional[str] = None
    description: Optional[str] = Field(None, max_length=500)
    caution_note: Optional[str] = Field(None, max_length=1000)
    receiving_account: Optional[str] = Field(None, max_length=500)
    order: Optional[int] = Field(None, ge=0)
    is_active: Optional[bool] = None

    @validator('name')
    def validate_name(cls, v):
        return _required_text(v, "Name")

    @validator('label')
    def validate_label(cls, v):
        return _required_text(v, "Label")


class PaymentMethodRead(BaseModel):
    id: str
    name: str
    type: PaymentMethodType
    label: str
    requires_code: bool
    requires_receipt: bool
    requires_address: bool
    requires_email: bool
    icon: Optional[str] = None
    description: Optional[str] = None
    caution_note: Optional[str] = None
    receiving_account: Optional[str] = None
    is_active: bool
    order: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
