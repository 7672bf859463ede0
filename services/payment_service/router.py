from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from shared.config.database import get_db
from shared.security import PAYMENT_RATE_LIMIT, get_current_user, limiter

from .schemas import PaymentCreate, PaymentResponse, SavedCardInput, SavedCardResponse
from .service import CardService, PaymentService

router = APIRouter(prefix="/payments", tags=["Payments"])
card_router = APIRouter(prefix="/cards", tags=["Cards"])


@router.post("/", response_model=PaymentResponse)
@limiter.limit(PAYMENT_RATE_LIMIT)
async def submit_payment(
    request: Request,
    payload: PaymentCreate,
    user_id: int = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    payment = await PaymentService.process_payment(db, user_id, payload)
    return PaymentResponse(
        status=payment.status,
        message="Payment processed successfully",
        payment_id=payment.id,
        order_id=payment.order_id,
    )


@card_router.get("/me", response_model=SavedCardResponse)
async def get_card(
    user_id: int = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    card = await CardService.get_card(db, user_id)
    return CardService.to_response(card)


@card_router.post("/me", response_model=SavedCardResponse)
async def save_card(
    payload: SavedCardInput,
    user_id: int = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    card = await CardService.save_card(db, user_id, payload)
    return CardService.to_response(card)


@card_router.put("/me", response_model=SavedCardResponse)
async def update_card(
    payload: SavedCardInput,
    user_id: int = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    card = await CardService.save_card(db, user_id, payload, must_exist=True)
    return CardService.to_response(card)


@card_router.delete("/me")
async def delete_card(
    user_id: int = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await CardService.delete_card(db, user_id)
    return {"message": "Card deleted successfully"}
