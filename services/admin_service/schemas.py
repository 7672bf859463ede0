from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel


class StatusUpdate(BaseModel):
    status: str


class PurchaseFilters(BaseModel):
    status: Optional[str] = None
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    search: Optional[str] = None


class Purchase(BaseModel):
    order_id: int
    date: Optional[datetime]
    amount: float
    customer_name: str
    customer_email: str
    product_name: str
    product_id: int
    status: str
    seller_id: int
    seller_name: str


class PurchaseMetrics(BaseModel):
    total_successful_payments: int
    total_revenue: float
    current_month_payments: float
