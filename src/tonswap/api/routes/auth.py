"""Authentication routes."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.ext.asyncio import AsyncSession

from tonswap.core.config import settings
from tonswap.core.deps import CurrentActiveUser
from tonswap.core.rate_limit import limiter
from tonswap.db.session import get_db, transactional
from tonswap.models.user import User
from tonswap.schemas.auth import Token, UserRegister
from tonswap.schemas.user import UserResponse
from tonswap.services import user_service

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.AUTH_RATE_LIMIT)
async def register(
    request: Request,
    user_data: UserRegister,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User:
    """
    Register a new user.

    The user gets a generated referral code and the default commission rate.

    Args:
        user_data: User registration data
        db: Database session

    Returns:
        The created user

    Raises:
        ConflictError: 409 if username or email already exists
    """
    async with transactional(db):
        new_user = await user_service.register_user(db, user_data)

    await db.refresh(new_user)
    return new_user


@router.post("/login", response_model=Token)
@limiter.limit(settings.AUTH_RATE_LIMIT)
async def login(
    request: Request,
    form_data: Annotated[OAuth2PasswordRequestForm, Depends()],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Token:
    """
    OAuth2 compatible token login.

    Get an access token for future requests using username (or email) and
    password. Administrators log in the same way; their role comes from the
    ``is_superuser`` flag.

    Raises:
        AuthenticationError: 401 if credentials are invalid
    """
    access_token = await user_service.create_user_token(db, form_data.username, form_data.password)
    return Token(access_token=access_token)


@router.get("/me", response_model=UserResponse)
async def read_users_me(current_user: CurrentActiveUser) -> User:
    """
    Get current authenticated user, including referral totals.

    Args:
        current_user: The authenticated user (from dependency)

    Returns:
        The current user
    """
    return current_user
