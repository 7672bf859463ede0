from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel

# Card fields are free-form strings; validation.validate_card decides what is acceptable

class CardDetails(BaseModel):
    card_number: str
    expiry_date: str # MM/YY
    card_holder_name: str
    cvv: str

class PaymentCreate(BaseModel):
    order_id: int
    card: CardDetails

class PaymentResponse(BaseModel):
    status: str
    message: str
    payment_id: int
    order_id: int

class SavedCardInput(BaseModel):
    card_number: str
    expiry_date: str # MM/YY
    card_holder_name: str

class SavedCardResponse(BaseModel):
    id: int
    card_number: str # masked
    expiry_date: date
    card_holder_name: str
    updated_at: Optional[datetime] = None
