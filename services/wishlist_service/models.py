from sqlalchemy import Column, DateTime, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.sql import func

from shared.config.database import Base


class WishlistEntry(Base):
    __tablename__ = "wishlist"
    __table_args__ = (UniqueConstraint("user_id", "item_id", name="uq_wishlist_user_item"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    item_id = Column(Integer, ForeignKey("items.id"), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
