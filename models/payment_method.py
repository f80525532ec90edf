# app/models/payment_method.py
from sqlalchemy import Column, Integer, String, Boolean, DateTime, func, Enum
import enum
from models.base import Base, new_id


class PaymentMethodType(str, enum.Enum):
    GIFT_CARD = "gift_card"
    BITCOIN = "bitcoin"
    PAYPAL = "paypal"
    OTHER = "other"


class PaymentMethod(Base):
    __tablename__ = "payment_methods"

    id = Column(String(36), primary_key=True, default=new_id)

    name = Column(String(50), nullable=False)
    type = Column(
        Enum("gift_card", "bitcoin", "paypal", "other", name="payment_method_type"),
        nullable=False,
        index=True
    )
    label = Column(String(100), nullable=False)  # input label shown to donors

    # which donation fields the method asks for
    requires_code = Column(Boolean, default=False, nullable=False)
    requires_receipt = Column(Boolean, default=False, nullable=False)
    requires_address = Column(Boolean, default=False, nullable=False)
    requires_email = Column(Boolean, default=False, nullable=False)

    icon = Column(String(255), nullable=True)
    description = Column(String(500), nullable=True)
    caution_note = Column(String(1000), nullable=True)
    receiving_account = Column(String(500), nullable=True)  # wallet, paypal email ...

    is_active = Column(Boolean, default=True, nullable=False)
    order = Column(Integer, default=0, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
