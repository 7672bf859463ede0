from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from services.item_service.schemas import ItemResponse


class WishlistToggle(BaseModel):
    item_id: int


class WishlistToggleResponse(BaseModel):
    message: str
    removed: bool


class WishlistItem(ItemResponse):
    added_to_wishlist: Optional[datetime]
    seller_city: Optional[str]
