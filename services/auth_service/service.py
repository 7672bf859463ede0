import os

import structlog
from fastapi import HTTPException, status
from passlib.context import CryptContext
from sqlalchemy.ext.asyncio import AsyncSession

from shared.security.jwt_handler import create_access_token

from .models import User
from .repository import UserRepository
from .schemas import AuthResponse, ProfileUpdate, UserCreate, UserLogin, UserResponse

logger = structlog.get_logger(__name__)

_pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=int(os.getenv("BCRYPT_ROUNDS", "12")),
)


class AuthService:

    @staticmethod
    def hash_password(password: str) -> str:
        return _pwd_context.hash(password)

    @staticmethod
    def _verify_password(plain: str, hashed: str) -> bool:
        return _pwd_context.verify(plain, hashed)

    @staticmethod
    async def _ensure_unique(
        db: AsyncSession, email: str, username: str, current_id: int | None = None
    ) -> None:
        by_email = await UserRepository.get_by_email(db, email)
        if by_email and by_email.id != current_id:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Email already exists",
            )
        by_username = await UserRepository.get_by_username(db, username)
        if by_username and by_username.id != current_id:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Username already exists",
            )

    @staticmethod
    async def register(db: AsyncSession, data: UserCreate) -> AuthResponse:
        await AuthService._ensure_unique(db, data.email, data.username)
        user = User(
            username=data.username,
            email=data.email,
            hashed_password=AuthService.hash_password(data.password),
            phone=data.phone,
            city=data.city,
            profile_picture=data.profile_picture,
        )
        user = await UserRepository.create(db, user)
        logger.info("user_registered", user_id=user.id)
        return AuthResponse(
            message="User created successfully",
            user=UserResponse.model_validate(user),
            access_token=create_access_token(user.id),
        )

    @staticmethod
    async def login(db: AsyncSession, data: UserLogin) -> AuthResponse:
        user = await UserRepository.get_by_email(db, data.email)
        if not user or not AuthService._verify_password(data.password, user.hashed_password):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid credentials",
                headers={"WWW-Authenticate": "Bearer"},
            )
        if not user.is_active:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Account is disabled",
            )
        return AuthResponse(
            message="Login successful",
            user=UserResponse.model_validate(user),
            access_token=create_access_token(user.id),
        )

    @staticmethod
    async def get_user_by_id(db: AsyncSession, user_id: int) -> User:
        user = await UserRepository.get_by_id(db, user_id)
        if not user:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
        return user

    @staticmethod
    async def update_profile(db: AsyncSession, user_id: int, data: ProfileUpdate) -> User:
        user = await AuthService.get_user_by_id(db, user_id)
        await AuthService._ensure_unique(db, data.email, data.username, current_id=user.id)

        user.username = data.username
        user.email = data.email
        user.phone = data.phone
        user.city = data.city
        if data.profile_picture is not None:
            user.profile_picture = data.profile_picture
        return await UserRepository.save(db, user)
