from fastapi import Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from services.auth_service.models import User
from services.auth_service.repository import UserRepository
from shared.config.database import get_db
from shared.security import get_current_user


async def require_admin(
    user_id: int = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> User:
    """Dependency that only lets active administrators through."""
    user = await UserRepository.get_by_id(db, user_id)
    if user is None or not user.is_admin or not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Access denied. Admin rights required.",
        )
    return user
