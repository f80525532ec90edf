# app/schemas/donation.py
from pydantic import BaseModel, Field, validator
from typing import Optional, List
from datetime import datetime
from enum import Enum

from models.donation import MIN_DONATION_AMOUNT
from schemas.user import ProfileRead
from utils.pagination import Pagination


class DonationStatus(str, Enum):
    PENDING = "pending"  # waiting for admin review
    CONFIRMED = "confirmed"  # payment received
    COMPLETED = "completed"
    CANCELLED = "cancelled"


# ---------- create ----------
class DonationCreate(BaseModel):
    """New donation, from the HTTP form or the realtime channel"""
    amount: float = Field(..., allow_inf_nan=False)
    message: Optional[str] = None
    is_anonymous: bool = False
    reason_id: Optional[str] = None
    payment_method_id: Optional[str] = None

    # method specific
    gift_card_code: Optional[str] = Field(None, max_length=100)
    receipt_image: Optional[str] = None
    wallet_address: Optional[str] = Field(None, max_length=500)
    paypal_email: Optional[str] = Field(None, max_length=255)
    payment_reference: Optional[str] = None

    @validator('amount')
    def validate_amount(cls, v):
        if v < MIN_DONATION_AMOUNT:
            raise ValueError(f"Minimum donation amount is ${MIN_DONATION_AMOUNT}")
        return v

    @validator('message')
    def validate_message(cls, v):
        if v is not None and len(v) > 500:
            raise ValueError("Message cannot exceed 500 characters")
        return v or None


class DonationStatusUpdate(BaseModel):
    status: DonationStatus


class DonationFilter(BaseModel):
    status: Optional[DonationStatus] = None
    user_id: Optional[str] = None


# ---------- output ----------
class DonationRead(BaseModel):
    id: str
    user_id: str
    amount: float
    status: DonationStatus
    payment_method_id: Optional[str] = None
    reason_id: Optional[str] = None
    message: Optional[str] = None
    is_anonymous: bool = False

    gift_card_code: Optional[str] = None
    receipt_image: Optional[str] = None
    wallet_address: Optional[str] = None
    paypal_email: Optional[str] = None

    created_at: datetime
    confirmed_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class DonationDetail(DonationRead):
    """Donation with the donor profile attached"""
    profiles: Optional[ProfileRead] = None


class DonationStatusResult(BaseModel):
    id: str
    status: DonationStatus
    confirmed_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class DonationList(BaseModel):
    donations: List[DonationDetail]
    pagination: Pagination


# ---------- statistics ----------
class DonationTotals(BaseModel):
    total_raised: float = 0
    total_donations: int = 0
    total_supporters: int = 0


class MyDonationStats(BaseModel):
    total_contributed: float = 0
    pending_amount: float = 0
    confirmed_count: int = 0
    pending_count: int = 0
    cancelled_count: int = 0
    total_donations: int = 0


class Supporter(BaseModel):
    user_id: str
    full_name: str
    total_amount: float
    is_anonymous: bool


class TopSupporters(BaseModel):
    supporters: List[Supporter]
    pagination: Pagination
