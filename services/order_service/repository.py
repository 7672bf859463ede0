from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import or_, select
from sqlalchemy.orm import aliased

from services.auth_service.models import User
from services.item_service.models import Item
from services.payment_service.models import PAYMENT_SUCCESS, Payment
from .models import Order

Buyer = aliased(User, name="buyer")
Seller = aliased(User, name="seller")

class OrderRepository:
    @staticmethod
    async def create_order(db: AsyncSession, order: Order):
        db.add(order)
        await db.commit()
        await db.refresh(order)
        return order

    @staticmethod
    async def get_order(db: AsyncSession, order_id: int):
        result = await db.execute(select(Order).where(Order.id == order_id))
        return result.scalars().first()

    @staticmethod
    async def get_order_detail(db: AsyncSession, order_id: int, user_id: int):
        """Order joined with item, both parties and its payment; buyer or seller only."""
        result = await db.execute(
            select(
                Order.id.label("order_id"),
                Order.order_date,
                Item.id.label("item_id"),
                Item.name.label("item_name"),
                Item.price.label("total_amount"),
                Item.image_url.label("item_image_url"),
                Buyer.username.label("buyer_name"),
                Buyer.email.label("buyer_email"),
                Seller.username.label("seller_name"),
                Payment.status.label("status"),
                Payment.payment_date,
            )
            .join(Item, Item.id == Order.item_id)
            .join(Buyer, Buyer.id == Order.buyer_id)
            .join(Seller, Seller.id == Order.seller_id)
            .outerjoin(Payment, Payment.order_id == Order.id)
            .where(Order.id == order_id)
            .where(or_(Order.buyer_id == user_id, Order.seller_id == user_id))
        )
        return result.mappings().first()

    @staticmethod
    async def list_purchased(db: AsyncSession, buyer_id: int):
        result = await db.execute(
            select(
                Order.id.label("id"),
                Item.id.label("item_id"),
                Item.name,
                Item.price,
                Item.image_url,
                Order.order_date.label("purchase_date"),
                Seller.username.label("seller_username"),
                Seller.email.label("seller_email"),
            )
            .join(Item, Item.id == Order.item_id)
            .join(Payment, Payment.order_id == Order.id)
            .join(Seller, Seller.id == Order.seller_id)
            .where(Order.buyer_id == buyer_id, Payment.status == PAYMENT_SUCCESS)
            .order_by(Order.order_date.desc(), Order.id.desc())
        )
        return result.mappings().all()

    @staticmethod
    async def list_sold(db: AsyncSession, seller_id: int):
        result = await db.execute(
            select(
                Order.id.label("order_id"),
                Item.id.label("item_id"),
                Item.name,
                Item.description,
                Item.price,
                Item.image_url,
                Order.order_date.label("sale_date"),
                Buyer.username.label("buyer_username"),
                Buyer.email.label("buyer_email"),
            )
            .join(Item, Item.id == Order.item_id)
            .join(Payment, Payment.order_id == Order.id)
            .join(Buyer, Buyer.id == Order.buyer_id)
            .where(
                Order.seller_id == seller_id,
                Item.is_sold.is_(True),
                Payment.status == PAYMENT_SUCCESS,
            )
            .order_by(Order.order_date.desc(), Order.id.desc())
        )
        return result.mappings().all()
