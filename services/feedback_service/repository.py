from sqlalchemy import String, cast, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from services.auth_service.models import User

from .models import Feedback


class FeedbackRepository:

    @staticmethod
    async def create(db: AsyncSession, feedback: Feedback) -> Feedback:
        db.add(feedback)
        await db.commit()
        await db.refresh(feedback)
        return feedback

    @staticmethod
    async def list_feedback(db: AsyncSession, search: str | None = None):
        stmt = (
            select(
                Feedback.id,
                User.username.label("user_name"),
                Feedback.rating,
                Feedback.message.label("comment"),
                Feedback.created_at.label("date"),
            )
            .join(User, User.id == Feedback.user_id)
            .order_by(Feedback.created_at.desc(), Feedback.id.desc())
        )
        if search:
            pattern = f"%{search}%"
            stmt = stmt.where(
                or_(
                    cast(Feedback.id, String).like(pattern),
                    User.username.ilike(pattern),
                    Feedback.message.ilike(pattern),
                )
            )
        result = await db.execute(stmt)
        return result.mappings().all()
