from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class ItemCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    price: float = Field(gt=0)
    image_url: Optional[str] = Field(default=None, max_length=255)


class ItemUpdate(ItemCreate):
    pass


class ItemCreated(BaseModel):
    message: str
    item_id: int


class ItemResponse(BaseModel):
    id: int
    seller_id: int
    name: str
    description: Optional[str]
    price: float
    image_url: Optional[str]
    is_sold: bool
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ItemListing(ItemResponse):
    seller_name: str
    seller_city: Optional[str]
    is_purchased: bool


class ItemDetail(ItemResponse):
    seller_name: str
    seller_email: str
    seller_phone: Optional[str]
    seller_city: Optional[str]
    seller_profile_picture: Optional[str]
