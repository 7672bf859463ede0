"""
Shared fixtures: the ASGI app over a throwaway SQLite database.

Environment must be in place before `main` is imported, because the engine,
the JWT secret and the rate limiter are all read at import time.
"""
import os
import tempfile

_DB_DIR = tempfile.mkdtemp(prefix="circula-tests-")
os.environ["DATABASE_URL"] = os.getenv(
    "TEST_DATABASE_URL", f"sqlite+aiosqlite:///{os.path.join(_DB_DIR, 'circula.db')}"
)
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ["OTLP_ENDPOINT"] = ""
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["LOG_LEVEL"] = "WARNING"

import httpx
import pytest
from sqlalchemy import func, select, update

from main import app
from services.auth_service.create_admin import create_admin
from services.item_service.models import Item
from services.order_service.models import Order
from services.payment_service.models import PAYMENT_SUCCESS, Card, Payment
from shared.config.database import AsyncSessionLocal, Base, engine

VALID_CARD = {
    "card_number": "4111 1111 1111 1111",
    "expiry_date": "12/39",
    "card_holder_name": "Alice Buyer",
    "cvv": "123",
}


class Marketplace:
    """Drives the API the way a client would, plus direct DB inspection."""

    def __init__(self, client: httpx.AsyncClient):
        self.client = client

    @staticmethod
    def headers(user: dict) -> dict:
        return {"Authorization": f"Bearer {user['token']}"}

    async def signup(self, username: str, city: str = "Pune") -> dict:
        resp = await self.client.post(
            "/auth/signup",
            json={
                "username": username,
                "email": f"{username}@circula.io",
                "password": "secret-pass",
                "phone": "5550100",
                "city": city,
            },
        )
        assert resp.status_code == 201, resp.text
        body = resp.json()
        return {"id": body["user"]["id"], "token": body["access_token"], "username": username}

    async def admin(self, username: str = "root") -> dict:
        user = await self.signup(username)
        async with AsyncSessionLocal() as db:
            await create_admin(db, username, f"{username}@circula.io", "unused")
        return user

    async def list_item(self, seller: dict, name: str = "Road bike", price: float = 500.0) -> int:
        resp = await self.client.post(
            "/items/",
            json={"name": name, "description": "Lightly used", "price": price},
            headers=self.headers(seller),
        )
        assert resp.status_code == 201, resp.text
        return resp.json()["item_id"]

    async def order(self, buyer: dict, item_id: int) -> int:
        resp = await self.client.post(
            "/orders/", json={"item_id": item_id}, headers=self.headers(buyer)
        )
        assert resp.status_code == 201, resp.text
        return resp.json()["id"]

    async def pay(self, buyer: dict, order_id: int, **card_overrides) -> httpx.Response:
        card = {**VALID_CARD, **card_overrides}
        return await self.client.post(
            "/payments/",
            json={"order_id": order_id, "card": card},
            headers=self.headers(buyer),
        )

    # --- direct database inspection ---

    async def item(self, item_id: int) -> Item:
        async with AsyncSessionLocal() as db:
            return await db.get(Item, item_id)

    async def payments_for_item(self, item_id: int) -> list[Payment]:
        async with AsyncSessionLocal() as db:
            result = await db.execute(
                select(Payment).join(Order, Order.id == Payment.order_id).where(Order.item_id == item_id)
            )
            return list(result.scalars().all())

    async def payment_count(self) -> int:
        async with AsyncSessionLocal() as db:
            return await db.scalar(select(func.count(Payment.id)))

    async def stored_card(self, user_id: int) -> Card | None:
        async with AsyncSessionLocal() as db:
            result = await db.execute(select(Card).where(Card.user_id == user_id))
            return result.scalars().first()

    async def force_sold_flag(self, item_id: int) -> None:
        async with AsyncSessionLocal() as db:
            await db.execute(update(Item).where(Item.id == item_id).values(is_sold=True))
            await db.commit()

    async def assert_sold_once(self, item_id: int) -> None:
        item = await self.item(item_id)
        successes = [p for p in await self.payments_for_item(item_id) if p.status == PAYMENT_SUCCESS]
        assert len(successes) <= 1
        assert item.is_sold == (len(successes) == 1)


@pytest.fixture
async def database():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def client(database):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as c:
        yield c


@pytest.fixture
def market(client):
    return Marketplace(client)
