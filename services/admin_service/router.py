from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from services.auth_service.schemas import UserResponse
from services.feedback_service.schemas import FeedbackEntry
from shared.config.database import get_db

from .dependencies import require_admin
from .schemas import Purchase, PurchaseFilters, PurchaseMetrics, StatusUpdate
from .service import AdminService

# Every route here needs an administrator
router = APIRouter(prefix="/admin", tags=["Admin"], dependencies=[Depends(require_admin)])


@router.get("/users", response_model=list[UserResponse])
async def list_users(db: AsyncSession = Depends(get_db)):
    return await AdminService.list_users(db)


@router.put("/users/{user_id}/status", response_model=UserResponse)
async def update_user_status(
    user_id: int, payload: StatusUpdate, db: AsyncSession = Depends(get_db)
):
    return await AdminService.set_user_status(db, user_id, payload.status)


@router.get("/purchases", response_model=list[Purchase])
async def list_purchases(
    status: str | None = Query(default=None),
    date_from: date | None = Query(default=None),
    date_to: date | None = Query(default=None),
    search: str | None = Query(default=None),
    db: AsyncSession = Depends(get_db),
):
    filters = PurchaseFilters(status=status, date_from=date_from, date_to=date_to, search=search)
    return await AdminService.list_purchases(db, filters)


@router.get("/purchases/metrics", response_model=PurchaseMetrics)
async def purchase_metrics(db: AsyncSession = Depends(get_db)):
    return await AdminService.purchase_metrics(db)


@router.get("/purchases/{order_id}", response_model=Purchase)
async def get_purchase(order_id: int, db: AsyncSession = Depends(get_db)):
    return await AdminService.get_purchase(db, order_id)


@router.put("/purchases/{order_id}/status", response_model=Purchase)
async def override_purchase_status(
    order_id: int, payload: StatusUpdate, db: AsyncSession = Depends(get_db)
):
    return await AdminService.override_payment_status(db, order_id, payload.status)


@router.get("/feedback", response_model=list[FeedbackEntry])
async def list_feedback(
    search: str | None = Query(default=None),
    db: AsyncSession = Depends(get_db),
):
    return await AdminService.list_feedback(db, search)
