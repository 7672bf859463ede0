"""
Create an administrator account, or promote an existing user to admin.

Run: python -m services.auth_service.create_admin --email admin@circula.io
"""
import argparse
import asyncio

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from shared.config.database import AsyncSessionLocal, Base, engine

# Import models so they register with Base before create_all
from services.item_service import models as item_models  # noqa: F401
from services.wishlist_service import models as wishlist_models  # noqa: F401
from services.order_service import models as order_models  # noqa: F401
from services.payment_service import models as payment_models  # noqa: F401
from services.feedback_service import models as feedback_models  # noqa: F401

from .models import ROLE_ADMIN, STATUS_ACTIVE, User
from .repository import UserRepository
from .service import AuthService

logger = structlog.get_logger(__name__)


async def create_admin(db: AsyncSession, username: str, email: str, password: str) -> User:
    existing = await UserRepository.get_by_email(db, email)
    if existing is None:
        existing = await UserRepository.get_by_username(db, username)

    if existing:
        existing.role = ROLE_ADMIN
        existing.status = STATUS_ACTIVE
        user = await UserRepository.save(db, existing)
        logger.info("admin_promoted", user_id=user.id)
        return user

    user = User(
        username=username,
        email=email,
        hashed_password=AuthService.hash_password(password),
        role=ROLE_ADMIN,
    )
    user = await UserRepository.create(db, user)
    logger.info("admin_created", user_id=user.id)
    return user


async def _run(username: str, email: str, password: str) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    async with AsyncSessionLocal() as db:
        await create_admin(db, username, email, password)
    await engine.dispose()


def main() -> None:
    parser = argparse.ArgumentParser(description="Create a Circula admin user")
    parser.add_argument("--username", default="admin")
    parser.add_argument("--email", default="admin@circula.io")
    parser.add_argument("--password", required=True)
    args = parser.parse_args()
    asyncio.run(_run(args.username, args.email, args.password))


if __name__ == "__main__":
    main()
