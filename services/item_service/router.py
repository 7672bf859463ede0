from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from shared.config.database import get_db
from shared.security import get_current_user

from .schemas import ItemCreate, ItemCreated, ItemDetail, ItemListing, ItemResponse, ItemUpdate
from .service import ItemService

router = APIRouter(prefix="/items", tags=["Items"])


@router.post("/", response_model=ItemCreated, status_code=status.HTTP_201_CREATED)
async def list_item(
    payload: ItemCreate,
    user_id: int = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    item = await ItemService.create_item(db, user_id, payload)
    return ItemCreated(message="Item listed successfully", item_id=item.id)


@router.get("/", response_model=list[ItemListing])
async def browse_items(
    show_all: bool = Query(default=False),
    seller_id: int | None = Query(default=None),
    user_id: int = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await ItemService.list_items(db, show_all=show_all, seller_id=seller_id)


@router.get("/mine", response_model=list[ItemResponse])
async def my_items(
    user_id: int = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await ItemService.list_my_items(db, user_id)


@router.get("/{item_id}", response_model=ItemDetail)
async def get_item(item_id: int, db: AsyncSession = Depends(get_db)):
    return await ItemService.get_item_detail(db, item_id)


@router.put("/{item_id}", response_model=ItemResponse)
async def update_item(
    item_id: int,
    payload: ItemUpdate,
    user_id: int = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await ItemService.update_item(db, item_id, user_id, payload)


@router.delete("/{item_id}")
async def delete_item(
    item_id: int,
    user_id: int = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await ItemService.delete_item(db, item_id, user_id)
    return {"message": "Item deleted successfully"}
