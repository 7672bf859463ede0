from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from services.auth_service.models import User
from services.order_service.models import Order
from services.payment_service.models import PAYMENT_SUCCESS, Payment
from services.wishlist_service.models import WishlistEntry

from .models import Item


def _purchased_clause():
    """EXISTS: some order for the item carries a Success payment."""
    return (
        select(Order.id)
        .join(Payment, Payment.order_id == Order.id)
        .where(Order.item_id == Item.id, Payment.status == PAYMENT_SUCCESS)
        .exists()
    )


class ItemRepository:

    @staticmethod
    async def create_item(db: AsyncSession, item: Item) -> Item:
        db.add(item)
        await db.commit()
        await db.refresh(item)
        return item

    @staticmethod
    async def get_item(db: AsyncSession, item_id: int) -> Optional[Item]:
        result = await db.execute(select(Item).where(Item.id == item_id))
        return result.scalars().first()

    @staticmethod
    async def list_items(db: AsyncSession, show_all: bool = False, seller_id: int | None = None):
        purchased = _purchased_clause()
        stmt = (
            select(Item, User.username, User.city, purchased.label("is_purchased"))
            .join(User, User.id == Item.seller_id)
            .order_by(Item.created_at.desc(), Item.id.desc())
        )
        if not show_all:
            stmt = stmt.where(~purchased)
        if seller_id is not None:
            stmt = stmt.where(Item.seller_id == seller_id)
        result = await db.execute(stmt)
        return result.all()

    @staticmethod
    async def get_item_with_seller(db: AsyncSession, item_id: int):
        result = await db.execute(
            select(Item, User)
            .join(User, User.id == Item.seller_id)
            .where(Item.id == item_id)
        )
        return result.first()

    @staticmethod
    async def list_unsold_for_seller(db: AsyncSession, seller_id: int):
        result = await db.execute(
            select(Item)
            .where(Item.seller_id == seller_id, Item.is_sold.is_(False))
            .order_by(Item.created_at.desc(), Item.id.desc())
        )
        return result.scalars().all()

    @staticmethod
    async def has_orders(db: AsyncSession, item_id: int) -> bool:
        result = await db.execute(select(Order.id).where(Order.item_id == item_id).limit(1))
        return result.first() is not None

    @staticmethod
    async def update_item(db: AsyncSession, item: Item) -> Item:
        await db.commit()
        await db.refresh(item)
        return item

    @staticmethod
    async def delete_item(db: AsyncSession, item_id: int, seller_id: int) -> None:
        await db.execute(delete(WishlistEntry).where(WishlistEntry.item_id == item_id))
        await db.execute(delete(Item).where(Item.id == item_id, Item.seller_id == seller_id))
        await db.commit()
