from sqlalchemy.ext.asyncio import AsyncSession

from services.item_service.repository import ItemRepository
from services.item_service.service import ItemService
from shared.errors import ItemNotFound

from .models import WishlistEntry
from .repository import WishlistRepository
from .schemas import WishlistItem, WishlistToggleResponse


class WishlistService:

    @staticmethod
    async def toggle(db: AsyncSession, user_id: int, item_id: int) -> WishlistToggleResponse:
        existing = await WishlistRepository.get_entry(db, user_id, item_id)
        if existing:
            await WishlistRepository.remove(db, user_id, item_id)
            return WishlistToggleResponse(message="Removed from wishlist", removed=True)

        if not await ItemRepository.get_item(db, item_id):
            raise ItemNotFound()
        await WishlistRepository.add(db, WishlistEntry(user_id=user_id, item_id=item_id))
        return WishlistToggleResponse(message="Added to wishlist", removed=False)

    @staticmethod
    async def list_item_ids(db: AsyncSession, user_id: int) -> list[int]:
        return await WishlistRepository.list_item_ids(db, user_id)

    @staticmethod
    async def list_items(db: AsyncSession, user_id: int) -> list[WishlistItem]:
        rows = await WishlistRepository.list_unsold_items(db, user_id)
        return [
            WishlistItem.model_validate(
                {
                    **ItemService.item_columns(item),
                    "added_to_wishlist": added_at,
                    "seller_city": seller_city,
                }
            )
            for item, added_at, seller_city in rows
        ]
