from datetime import date

from sqlalchemy import delete, func, select, update
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from services.item_service.models import Item
from services.order_service.models import Order
from .models import PAYMENT_SUCCESS, Card, Payment

_UPSERT_INSERTS = {"postgresql": postgresql_insert, "sqlite": sqlite_insert}


class PaymentRepository:
    """Queries used inside the payment transaction. Nothing here commits."""

    @staticmethod
    async def get_order(db: AsyncSession, order_id: int):
        result = await db.execute(select(Order).where(Order.id == order_id))
        return result.scalars().first()

    @staticmethod
    async def has_successful_payment(db: AsyncSession, item_id: int) -> bool:
        result = await db.execute(
            select(Payment.id)
            .join(Order, Order.id == Payment.order_id)
            .where(Order.item_id == item_id, Payment.status == PAYMENT_SUCCESS)
            .limit(1)
        )
        return result.first() is not None

    @staticmethod
    async def mark_item_sold(db: AsyncSession, item_id: int) -> int:
        """Conditional flip of the sold flag. Returns the number of rows changed."""
        result = await db.execute(
            update(Item)
            .where(Item.id == item_id, Item.is_sold.is_(False))
            .values(is_sold=True)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    @staticmethod
    async def create_payment(db: AsyncSession, payment: Payment) -> Payment:
        db.add(payment)
        await db.flush()
        return payment

    @staticmethod
    async def update_status_for_order(db: AsyncSession, order_id: int, status: str) -> int:
        result = await db.execute(
            update(Payment)
            .where(Payment.order_id == order_id)
            .values(status=status)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount


class CardRepository:

    @staticmethod
    async def get_for_user(db: AsyncSession, user_id: int):
        result = await db.execute(select(Card).where(Card.user_id == user_id))
        return result.scalars().first()

    @staticmethod
    async def upsert(
        db: AsyncSession, user_id: int, card_number: str, expiry_date: date, card_holder_name: str
    ) -> Card:
        """
        Insert-or-update on the unique user_id, as one statement.

        Two transactions storing a first card for the same user both reach the
        INSERT; ON CONFLICT turns the second into an update instead of a
        unique violation.
        """
        insert = _UPSERT_INSERTS[db.get_bind().dialect.name]
        values = {
            "card_number": card_number,
            "expiry_date": expiry_date,
            "card_holder_name": card_holder_name,
        }
        stmt = insert(Card).values(user_id=user_id, **values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[Card.user_id],
            set_={**values, "updated_at": func.now()},
        )
        await db.execute(stmt)

        result = await db.execute(
            select(Card)
            .where(Card.user_id == user_id)
            .execution_options(populate_existing=True)
        )
        return result.scalars().one()

    @staticmethod
    async def delete_for_user(db: AsyncSession, user_id: int) -> int:
        result = await db.execute(delete(Card).where(Card.user_id == user_id))
        return result.rowcount
