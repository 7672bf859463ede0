import time
from datetime import date

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from shared.errors import (
    CirculaError,
    ItemAlreadySold,
    NotFoundError,
    OrderAccessDenied,
    OrderNotFound,
    PaymentProcessingError,
)
from shared.observability import circula_payment_duration_seconds, circula_payments_total
from .models import PAYMENT_SUCCESS, Card, Payment
from .repository import CardRepository, PaymentRepository
from .schemas import PaymentCreate, SavedCardInput, SavedCardResponse
from .validation import clean_card_number, expiry_to_date, mask_card_number, validate_card

logger = structlog.get_logger(__name__)

class PaymentService:
    @staticmethod
    async def process_payment(
        db: AsyncSession, buyer_id: int, data: PaymentCreate, today: date | None = None
    ) -> Payment:
        """
        Captures a (simulated) card payment and sells the order's item.

        Card format is checked before any database work. Everything else
        runs in one transaction: ownership, the at-most-one-success check,
        the conditional sold-flag flip, the stored-card upsert and the
        payment insert commit together or not at all. The conditional
        update comes first among the writes, so concurrent attempts on the
        same item queue on the item row and a loser sees zero affected rows
        before it has written anything.
        """
        card = data.card
        log = logger.bind(
            order_id=data.order_id,
            buyer_id=buyer_id,
            card=mask_card_number(card.card_number),
        )
        started = time.perf_counter()

        try:
            validate_card(
                card.card_number,
                card.expiry_date,
                card.card_holder_name,
                cvv=card.cvv,
                today=today,
            )

            async with db.begin():
                order = await PaymentRepository.get_order(db, data.order_id)
                if order is None:
                    raise OrderNotFound()
                if order.buyer_id != buyer_id:
                    raise OrderAccessDenied()

                if await PaymentRepository.has_successful_payment(db, order.item_id):
                    raise ItemAlreadySold()

                if await PaymentRepository.mark_item_sold(db, order.item_id) != 1:
                    raise ItemAlreadySold()

                stored_card = await CardRepository.upsert(
                    db,
                    buyer_id,
                    clean_card_number(card.card_number),
                    expiry_to_date(card.expiry_date),
                    card.card_holder_name.strip(),
                )

                payment = await PaymentRepository.create_payment(
                    db,
                    Payment(order_id=order.id, card_id=stored_card.id, status=PAYMENT_SUCCESS),
                )
        except CirculaError as exc:
            circula_payments_total.labels(status=exc.code).inc()
            log.info("payment_rejected", reason=exc.code)
            raise
        except SQLAlchemyError as exc:
            circula_payments_total.labels(status="error").inc()
            log.error("payment_failed", error=str(exc))
            raise PaymentProcessingError() from exc
        finally:
            circula_payment_duration_seconds.observe(time.perf_counter() - started)

        circula_payments_total.labels(status="success").inc()
        log.info("payment_succeeded", payment_id=payment.id, item_id=order.item_id)
        return payment


class CardService:
    @staticmethod
    def to_response(card: Card) -> SavedCardResponse:
        return SavedCardResponse(
            id=card.id,
            card_number=mask_card_number(card.card_number),
            expiry_date=card.expiry_date,
            card_holder_name=card.card_holder_name,
            updated_at=card.updated_at,
        )

    @staticmethod
    async def get_card(db: AsyncSession, user_id: int) -> Card:
        card = await CardRepository.get_for_user(db, user_id)
        if card is None:
            raise NotFoundError("No card found for this user")
        return card

    @staticmethod
    async def save_card(
        db: AsyncSession,
        user_id: int,
        data: SavedCardInput,
        must_exist: bool = False,
        today: date | None = None,
    ) -> Card:
        validate_card(
            data.card_number,
            data.expiry_date,
            data.card_holder_name,
            require_cvv=False,
            today=today,
        )
        async with db.begin():
            if must_exist and await CardRepository.get_for_user(db, user_id) is None:
                raise NotFoundError("No card found for this user")
            card = await CardRepository.upsert(
                db,
                user_id,
                clean_card_number(data.card_number),
                expiry_to_date(data.expiry_date),
                data.card_holder_name.strip(),
            )
        await db.refresh(card)
        logger.info("card_saved", user_id=user_id, card=mask_card_number(card.card_number))
        return card

    @staticmethod
    async def delete_card(db: AsyncSession, user_id: int) -> None:
        async with db.begin():
            if await CardRepository.delete_for_user(db, user_id) == 0:
                raise NotFoundError("No card found for this user")
        logger.info("card_deleted", user_id=user_id)
