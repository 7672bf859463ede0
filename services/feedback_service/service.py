import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from .models import Feedback
from .repository import FeedbackRepository
from .schemas import FeedbackCreate

logger = structlog.get_logger(__name__)


class FeedbackService:

    @staticmethod
    async def submit(db: AsyncSession, user_id: int, data: FeedbackCreate) -> Feedback:
        feedback = await FeedbackRepository.create(
            db, Feedback(user_id=user_id, rating=data.rating, message=data.message)
        )
        logger.info("feedback_submitted", feedback_id=feedback.id, rating=data.rating)
        return feedback

    @staticmethod
    async def list_feedback(db: AsyncSession, search: str | None = None) -> list[dict]:
        rows = await FeedbackRepository.list_feedback(db, search)
        return [dict(row) for row in rows]
