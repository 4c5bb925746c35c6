"""
Authentication endpoints: register, login, and who am I.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from train_booking.core.config import get_settings
from train_booking.core.security import get_current_user
from train_booking.db.session import get_db
from train_booking.schemas.user import UserCreate, UserResponse, UserLogin, Token
from train_booking.services.auth_service import register_user, authenticate_user, get_active_user

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(user_data: UserCreate, db: AsyncSession = Depends(get_db)):
    """Register a new account. The email is the identity seats are booked under."""
    return await register_user(db, user_data)


@router.post("/login", response_model=Token)
async def login(login_data: UserLogin, db: AsyncSession = Depends(get_db)):
    """Authenticate and receive a JWT access token."""
    token = await authenticate_user(db, login_data)
    return Token(access_token=token, expires_in=get_settings().ACCESS_TOKEN_EXPIRE_MINUTES * 60)


@router.get("/me", response_model=UserResponse)
async def me(email: str = Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    """The account behind the bearer token."""
    return await get_active_user(db, email)
