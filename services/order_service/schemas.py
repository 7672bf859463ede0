from datetime import datetime
from typing import Optional

from pydantic import BaseModel

class OrderCreate(BaseModel):
    item_id: int

class OrderCreated(BaseModel):
    message: str
    id: int

class OrderDetail(BaseModel):
    order_id: int
    order_date: Optional[datetime]
    item_id: int
    item_name: str
    total_amount: float
    item_image_url: Optional[str]
    buyer_name: str
    buyer_email: str
    seller_name: str
    status: Optional[str] # payment status, None until a payment row exists
    payment_date: Optional[datetime]

class PurchasedItem(BaseModel):
    id: int # order id
    item_id: int
    name: str
    price: float
    image_url: Optional[str]
    purchase_date: Optional[datetime]
    seller_username: str
    seller_email: str

class SoldItem(BaseModel):
    order_id: int
    item_id: int
    name: str
    description: Optional[str]
    price: float
    image_url: Optional[str]
    sale_date: Optional[datetime]
    buyer_username: str
    buyer_email: str
