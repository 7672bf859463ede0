from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from shared.config.database import get_db
from shared.security import get_current_user

from .schemas import WishlistItem, WishlistToggle, WishlistToggleResponse
from .service import WishlistService

router = APIRouter(prefix="/wishlist", tags=["Wishlist"])


@router.get("/", response_model=list[int])
async def wishlist_ids(
    user_id: int = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await WishlistService.list_item_ids(db, user_id)


@router.post("/toggle", response_model=WishlistToggleResponse)
async def toggle_wishlist(
    payload: WishlistToggle,
    user_id: int = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await WishlistService.toggle(db, user_id, payload.item_id)


@router.get("/items", response_model=list[WishlistItem])
async def wishlist_items(
    user_id: int = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await WishlistService.list_items(db, user_id)
