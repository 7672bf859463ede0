from datetime import datetime, time, timedelta, timezone

from sqlalchemy import String, cast, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from services.auth_service.models import User
from services.item_service.models import Item
from services.order_service.models import Order
from services.payment_service.models import PAYMENT_SUCCESS, Payment

from .schemas import PurchaseFilters

Buyer = aliased(User, name="buyer")
Seller = aliased(User, name="seller")


def _day_start(day) -> datetime:
    return datetime.combine(day, time.min, tzinfo=timezone.utc)


def _purchases_query():
    """Orders that carry a payment row, with buyer, item and seller."""
    return (
        select(
            Order.id.label("order_id"),
            Order.order_date.label("date"),
            Item.price.label("amount"),
            Buyer.username.label("customer_name"),
            Buyer.email.label("customer_email"),
            Item.name.label("product_name"),
            Item.id.label("product_id"),
            Payment.status.label("status"),
            Seller.id.label("seller_id"),
            Seller.username.label("seller_name"),
        )
        .join(Buyer, Buyer.id == Order.buyer_id)
        .join(Item, Item.id == Order.item_id)
        .join(Payment, Payment.order_id == Order.id)
        .join(Seller, Seller.id == Item.seller_id)
    )


def _successful_sales():
    return (
        select(func.coalesce(func.sum(Item.price), 0))
        .select_from(Order)
        .join(Item, Item.id == Order.item_id)
        .join(Payment, Payment.order_id == Order.id)
        .where(Payment.status == PAYMENT_SUCCESS)
    )


class AdminRepository:

    @staticmethod
    async def list_purchases(db: AsyncSession, filters: PurchaseFilters):
        stmt = _purchases_query()
        if filters.status:
            stmt = stmt.where(Payment.status == filters.status)
        if filters.date_from:
            stmt = stmt.where(Order.order_date >= _day_start(filters.date_from))
        if filters.date_to:
            # Inclusive: everything before the start of the following day
            stmt = stmt.where(Order.order_date < _day_start(filters.date_to + timedelta(days=1)))
        if filters.search:
            pattern = f"%{filters.search}%"
            stmt = stmt.where(
                or_(
                    cast(Order.id, String).like(pattern),
                    Buyer.username.ilike(pattern),
                    Buyer.email.ilike(pattern),
                    Item.name.ilike(pattern),
                )
            )
        stmt = stmt.order_by(Order.order_date.desc(), Order.id.desc())
        result = await db.execute(stmt)
        return result.mappings().all()

    @staticmethod
    async def get_purchase(db: AsyncSession, order_id: int):
        result = await db.execute(_purchases_query().where(Order.id == order_id))
        return result.mappings().first()

    @staticmethod
    async def purchase_metrics(db: AsyncSession, now: datetime) -> dict:
        total = await db.scalar(
            select(func.count(Payment.id)).where(Payment.status == PAYMENT_SUCCESS)
        )
        revenue = await db.scalar(_successful_sales())

        month_start = _day_start(now.date().replace(day=1))
        next_month = _day_start((month_start + timedelta(days=32)).date().replace(day=1))
        month_revenue = await db.scalar(
            _successful_sales().where(
                Order.order_date >= month_start,
                Order.order_date < next_month,
            )
        )
        return {
            "total_successful_payments": total or 0,
            "total_revenue": float(revenue or 0),
            "current_month_payments": float(month_revenue or 0),
        }

    @staticmethod
    async def get_item_for_order(db: AsyncSession, order_id: int):
        result = await db.execute(
            select(Item).join(Order, Order.item_id == Item.id).where(Order.id == order_id)
        )
        return result.scalars().first()
