import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from services.item_service.repository import ItemRepository
from shared.errors import ItemAlreadySold, ItemNotFound, OrderNotFound
from shared.observability import circula_orders_created_total
from .models import Order
from .repository import OrderRepository

logger = structlog.get_logger(__name__)

class OrderService:
    @staticmethod
    async def create_order(db: AsyncSession, buyer_id: int, item_id: int) -> Order:
        """
        Records a buyer's intent to purchase an item.

        The sold check here is optimistic: several orders may exist for one
        unsold item. Only the payment transaction decides who gets it.
        """
        item = await ItemRepository.get_item(db, item_id)
        if item is None:
            raise ItemNotFound()
        if item.is_sold:
            raise ItemAlreadySold("Item not found or already sold")

        order = Order(item_id=item.id, buyer_id=buyer_id, seller_id=item.seller_id)
        order = await OrderRepository.create_order(db, order)

        circula_orders_created_total.inc()
        logger.info("order_created", order_id=order.id, item_id=item.id, buyer_id=buyer_id)
        return order

    @staticmethod
    async def get_order_detail(db: AsyncSession, order_id: int, user_id: int):
        detail = await OrderRepository.get_order_detail(db, order_id, user_id)
        if detail is None:
            raise OrderNotFound("Order not found or access denied")
        return dict(detail)

    @staticmethod
    async def list_purchased(db: AsyncSession, buyer_id: int):
        rows = await OrderRepository.list_purchased(db, buyer_id)
        return [dict(row) for row in rows]

    @staticmethod
    async def list_sold(db: AsyncSession, seller_id: int):
        rows = await OrderRepository.list_sold(db, seller_id)
        return [dict(row) for row in rows]
