from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from services.auth_service.models import User
from services.item_service.models import Item

from .models import WishlistEntry


class WishlistRepository:

    @staticmethod
    async def get_entry(db: AsyncSession, user_id: int, item_id: int) -> Optional[WishlistEntry]:
        result = await db.execute(
            select(WishlistEntry).where(
                WishlistEntry.user_id == user_id,
                WishlistEntry.item_id == item_id,
            )
        )
        return result.scalars().first()

    @staticmethod
    async def add(db: AsyncSession, entry: WishlistEntry) -> WishlistEntry:
        db.add(entry)
        await db.commit()
        return entry

    @staticmethod
    async def remove(db: AsyncSession, user_id: int, item_id: int) -> None:
        await db.execute(
            delete(WishlistEntry).where(
                WishlistEntry.user_id == user_id,
                WishlistEntry.item_id == item_id,
            )
        )
        await db.commit()

    @staticmethod
    async def list_item_ids(db: AsyncSession, user_id: int) -> list[int]:
        result = await db.execute(
            select(WishlistEntry.item_id).where(WishlistEntry.user_id == user_id)
        )
        return list(result.scalars().all())

    @staticmethod
    async def list_unsold_items(db: AsyncSession, user_id: int):
        result = await db.execute(
            select(Item, WishlistEntry.created_at, User.city)
            .select_from(WishlistEntry)
            .join(Item, Item.id == WishlistEntry.item_id)
            .join(User, User.id == Item.seller_id)
            .where(WishlistEntry.user_id == user_id, Item.is_sold.is_(False))
            .order_by(WishlistEntry.created_at.desc(), WishlistEntry.id.desc())
        )
        return result.all()
