from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from shared.config.database import get_db
from shared.security import get_current_user

from .schemas import FeedbackCreate, FeedbackCreated
from .service import FeedbackService

router = APIRouter(prefix="/feedback", tags=["Feedback"])


@router.post("/", response_model=FeedbackCreated, status_code=status.HTTP_201_CREATED)
async def submit_feedback(
    payload: FeedbackCreate,
    user_id: int = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    feedback = await FeedbackService.submit(db, user_id, payload)
    return FeedbackCreated(message="Feedback submitted successfully", feedback_id=feedback.id)
