from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from shared.config.database import get_db
from shared.security import get_current_user
from .schemas import OrderCreate, OrderCreated, OrderDetail, PurchasedItem, SoldItem
from .service import OrderService

router = APIRouter(prefix="/orders", tags=["Orders"])

@router.post("/", response_model=OrderCreated, status_code=status.HTTP_201_CREATED)
async def create_order(
    payload: OrderCreate,
    user_id: int = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    order = await OrderService.create_order(db, user_id, payload.item_id)
    return OrderCreated(message="Order created successfully", id=order.id)

@router.get("/purchased", response_model=list[PurchasedItem])
async def purchased_items(
    user_id: int = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await OrderService.list_purchased(db, user_id)

@router.get("/sold", response_model=list[SoldItem])
async def sold_items(
    user_id: int = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await OrderService.list_sold(db, user_id)

@router.get("/{order_id}", response_model=OrderDetail)
async def get_order(
    order_id: int,
    user_id: int = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await OrderService.get_order_detail(db, order_id, user_id)
