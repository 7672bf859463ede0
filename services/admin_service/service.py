from datetime import datetime, timezone

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from services.auth_service.models import STATUS_ACTIVE, STATUS_INACTIVE, User
from services.auth_service.repository import UserRepository
from services.feedback_service.service import FeedbackService
from services.payment_service.models import PAYMENT_STATUSES, PAYMENT_SUCCESS
from services.payment_service.repository import PaymentRepository
from shared.errors import NotFoundError, ValidationError
from shared.observability import circula_payment_status_overrides_total

from .repository import AdminRepository
from .schemas import PurchaseFilters

logger = structlog.get_logger(__name__)

USER_STATUSES = (STATUS_ACTIVE, STATUS_INACTIVE)


class AdminService:

    @staticmethod
    async def list_users(db: AsyncSession):
        return await UserRepository.list_all(db)

    @staticmethod
    async def set_user_status(db: AsyncSession, user_id: int, status: str) -> User:
        if status not in USER_STATUSES:
            raise ValidationError("Invalid status. Use Active or Inactive.")
        user = await UserRepository.get_by_id(db, user_id)
        if user is None:
            raise NotFoundError("User not found")
        user.status = status
        user = await UserRepository.save(db, user)
        logger.info("user_status_changed", user_id=user_id, status=status)
        return user

    @staticmethod
    async def list_purchases(db: AsyncSession, filters: PurchaseFilters) -> list[dict]:
        rows = await AdminRepository.list_purchases(db, filters)
        return [dict(row) for row in rows]

    @staticmethod
    async def get_purchase(db: AsyncSession, order_id: int) -> dict:
        purchase = await AdminRepository.get_purchase(db, order_id)
        if purchase is None:
            raise NotFoundError("Purchase not found")
        return dict(purchase)

    @staticmethod
    async def purchase_metrics(db: AsyncSession, now: datetime | None = None) -> dict:
        return await AdminRepository.purchase_metrics(db, now or datetime.now(timezone.utc))

    @staticmethod
    async def override_payment_status(db: AsyncSession, order_id: int, status: str) -> dict:
        """
        Rewrites a payment's status as an administrative override.

        The item's sold flag is left untouched, so an override can leave a
        sold item without a Success payment (or the reverse). This is logged
        as a warning rather than reconciled.
        """
        if status not in PAYMENT_STATUSES:
            raise ValidationError("Invalid status. Use Success or Failed only.")

        if await PaymentRepository.update_status_for_order(db, order_id, status) == 0:
            await db.rollback()
            raise NotFoundError("Purchase not found")
        await db.commit()

        circula_payment_status_overrides_total.labels(status=status).inc()
        item = await AdminRepository.get_item_for_order(db, order_id)
        if item is not None and item.is_sold != (status == PAYMENT_SUCCESS):
            logger.warning(
                "payment_override_desynced",
                order_id=order_id,
                item_id=item.id,
                status=status,
                item_sold=item.is_sold,
            )
        else:
            logger.info("payment_status_overridden", order_id=order_id, status=status)

        return await AdminService.get_purchase(db, order_id)

    @staticmethod
    async def list_feedback(db: AsyncSession, search: str | None = None) -> list[dict]:
        return await FeedbackService.list_feedback(db, search)
