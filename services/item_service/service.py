import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from shared.errors import ForbiddenError, ItemNotFound, ValidationError

from .models import Item
from .repository import ItemRepository
from .schemas import ItemCreate, ItemDetail, ItemListing, ItemUpdate

logger = structlog.get_logger(__name__)


class ItemService:

    @staticmethod
    async def create_item(db: AsyncSession, seller_id: int, data: ItemCreate) -> Item:
        item = Item(
            seller_id=seller_id,
            name=data.name,
            description=data.description,
            price=data.price,
            image_url=data.image_url,
            is_sold=False,
        )
        item = await ItemRepository.create_item(db, item)
        logger.info("item_listed", item_id=item.id, seller_id=seller_id)
        return item

    @staticmethod
    async def list_items(
        db: AsyncSession, show_all: bool = False, seller_id: int | None = None
    ) -> list[ItemListing]:
        rows = await ItemRepository.list_items(db, show_all=show_all, seller_id=seller_id)
        listings = []
        for item, seller_name, seller_city, is_purchased in rows:
            listing = ItemListing.model_validate(
                {
                    **ItemService.item_columns(item),
                    "seller_name": seller_name,
                    "seller_city": seller_city,
                    "is_purchased": bool(is_purchased),
                }
            )
            listings.append(listing)
        return listings

    @staticmethod
    async def get_item_detail(db: AsyncSession, item_id: int) -> ItemDetail:
        row = await ItemRepository.get_item_with_seller(db, item_id)
        if row is None:
            raise ItemNotFound()
        item, seller = row
        return ItemDetail.model_validate(
            {
                **ItemService.item_columns(item),
                "seller_name": seller.username,
                "seller_email": seller.email,
                "seller_phone": seller.phone,
                "seller_city": seller.city,
                "seller_profile_picture": seller.profile_picture,
            }
        )

    @staticmethod
    async def list_my_items(db: AsyncSession, seller_id: int):
        return await ItemRepository.list_unsold_for_seller(db, seller_id)

    @staticmethod
    async def _get_editable(db: AsyncSession, item_id: int, user_id: int, action: str) -> Item:
        item = await ItemRepository.get_item(db, item_id)
        if not item:
            raise ItemNotFound()
        if item.seller_id != user_id:
            raise ForbiddenError("Only the seller can change this item")
        if item.is_sold:
            raise ValidationError(f"Cannot {action} sold item")
        return item

    @staticmethod
    async def update_item(db: AsyncSession, item_id: int, user_id: int, data: ItemUpdate) -> Item:
        item = await ItemService._get_editable(db, item_id, user_id, "edit")
        item.name = data.name
        item.description = data.description
        item.price = data.price
        if data.image_url is not None:
            item.image_url = data.image_url
        return await ItemRepository.update_item(db, item)

    @staticmethod
    async def delete_item(db: AsyncSession, item_id: int, user_id: int) -> None:
        await ItemService._get_editable(db, item_id, user_id, "delete")
        if await ItemRepository.has_orders(db, item_id):
            raise ValidationError("Item has associated orders")
        await ItemRepository.delete_item(db, item_id, user_id)
        logger.info("item_deleted", item_id=item_id, seller_id=user_id)

    @staticmethod
    def item_columns(item: Item) -> dict:
        return {
            "id": item.id,
            "seller_id": item.seller_id,
            "name": item.name,
            "description": item.description,
            "price": item.price,
            "image_url": item.image_url,
            "is_sold": item.is_sold,
            "created_at": item.created_at,
        }
