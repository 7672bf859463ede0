from sqlalchemy import Column, DateTime, ForeignKey, Integer
from sqlalchemy.sql import func
from shared.config.database import Base

class Order(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    item_id = Column(Integer, ForeignKey("items.id"), nullable=False, index=True)
    buyer_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    # Seller captured at checkout time
    seller_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    order_date = Column(DateTime(timezone=True), server_default=func.now())
