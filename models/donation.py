# app/models/donation.py
from sqlalchemy import Column, String, Text, Boolean, DateTime, func, ForeignKey, Float, Enum, CheckConstraint
import enum
from models.base import Base, new_id


class DonationStatus(str, enum.Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


# statuses that count towards totals and the leaderboard
COUNTED_STATUSES = (DonationStatus.CONFIRMED.value, DonationStatus.COMPLETED.value)

MIN_DONATION_AMOUNT = 500


class Donation(Base):
    __tablename__ = "donations"
    __table_args__ = (
        CheckConstraint(f"amount >= {MIN_DONATION_AMOUNT}", name="ck_donations_min_amount"),
    )

    id = Column(String(36), primary_key=True, default=new_id)

    # owner
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)

    # payment
    amount = Column(Float, nullable=False)
    status = Column(
        Enum("pending", "confirmed", "completed", "cancelled", name="donation_status"),
        default=DonationStatus.PENDING.value,
        nullable=False,
        index=True
    )
    # weak references, no cascade
    payment_method_id = Column(String(36), nullable=True)
    reason_id = Column(String(36), nullable=True)
    payment_reference = Column(String(255), nullable=True)

    message = Column(String(500), nullable=True)
    is_anonymous = Column(Boolean, default=False, nullable=False, index=True)

    # method specific
    gift_card_code = Column(String(100), nullable=True)
    receipt_image = Column(Text, nullable=True)  # url
    wallet_address = Column(String(500), nullable=True)
    paypal_email = Column(String(255), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    confirmed_at = Column(DateTime(timezone=True), nullable=True)
    completed_at = Column(DateTime(timezone=True), nullable=True)
