from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, String
from sqlalchemy.sql import func
from shared.config.database import Base

PAYMENT_SUCCESS = "Success"
PAYMENT_FAILED = "Failed"
PAYMENT_STATUSES = (PAYMENT_SUCCESS, PAYMENT_FAILED)


class Card(Base):
    """The buyer's stored card. One per user; CVV is never persisted."""

    __tablename__ = "cards"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False)
    card_number = Column(String(16), nullable=False) # digits only
    expiry_date = Column(Date, nullable=False) # first day of the expiry month
    card_holder_name = Column(String(100), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())


class Payment(Base):
    __tablename__ = "payments"

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id"), unique=True, nullable=False)
    card_id = Column(Integer, ForeignKey("cards.id", ondelete="SET NULL"), nullable=True)
    status = Column(String(20), nullable=False, default=PAYMENT_SUCCESS) # Success, Failed
    payment_date = Column(DateTime(timezone=True), server_default=func.now())
