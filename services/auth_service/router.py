from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from shared.config.database import get_db
from shared.security import LOGIN_RATE_LIMIT, get_current_user, limiter

from .schemas import AuthResponse, ProfileUpdate, UserCreate, UserLogin, UserResponse
from .service import AuthService

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post(
    "/signup",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new customer account",
)
async def signup(payload: UserCreate, db: AsyncSession = Depends(get_db)):
    return await AuthService.register(db, payload)


@router.post(
    "/login",
    response_model=AuthResponse,
    summary="Authenticate and receive a JWT access token",
)
@limiter.limit(LOGIN_RATE_LIMIT)
async def login(request: Request, payload: UserLogin, db: AsyncSession = Depends(get_db)):
    return await AuthService.login(db, payload)


@router.post("/logout", summary="Acknowledge a client-side logout")
async def logout(user_id: int = Depends(get_current_user)):
    # Tokens are stateless; the client discards its copy
    return {"message": "Logout successful"}


@router.get("/profile", response_model=UserResponse)
async def get_profile(
    user_id: int = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await AuthService.get_user_by_id(db, user_id)


@router.put("/profile", response_model=UserResponse)
async def update_profile(
    payload: ProfileUpdate,
    user_id: int = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await AuthService.update_profile(db, user_id, payload)
