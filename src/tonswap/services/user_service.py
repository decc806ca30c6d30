"""Service layer for user-related operations.

Centralizes registration, authentication and administrator edits of users so
that route handlers stay thin. All data access goes through UserRepository.
"""

import logging
from datetime import timedelta

from sqlalchemy.ext.asyncio import AsyncSession

from tonswap.core.config import settings
from tonswap.core.exceptions import AuthenticationError, ConflictError, NotFoundError
from tonswap.core.security import create_access_token, get_password_hash, verify_password
from tonswap.models.user import User
from tonswap.repositories.user import UserRepository
from tonswap.schemas.auth import UserRegister
from tonswap.services.referral_service import generate_unique_referral_code

logger = logging.getLogger(__name__)


async def get_user(db: AsyncSession, user_id: int) -> User:
    """Retrieve a user by id.

    Raises:
        NotFoundError: If the user does not exist
    """
    repo = UserRepository(User, db)
    user = await repo.get(user_id)
    if user is None:
        raise NotFoundError(f"User {user_id} not found")
    return user


async def get_user_by_username(db: AsyncSession, username: str) -> User | None:
    """Retrieve a user by their username.

    Args:
        db: Async database session
        username: User's username

    Returns:
        User model instance if found, None otherwise
    """
    repo = UserRepository(User, db)
    return await repo.get_by_username(username)


async def list_users(db: AsyncSession, *, skip: int = 0, limit: int = 100) -> list[User]:
    repo = UserRepository(User, db)
    return await repo.get_multi(skip=skip, limit=limit)


async def register_user(
    db: AsyncSession,
    user_in: UserRegister,
    *,
    is_superuser: bool = False,
) -> User:
    """Create a user with a hashed password and a generated referral code.

    The commission rate starts at the configured default.

    Args:
        db: Async database session
        user_in: Registration data
        is_superuser: Whether the user is an administrator

    Returns:
        The new user (flushed, committed by the caller)

    Raises:
        ConflictError: If the email or username is already registered

    Example:
        >>> user = await register_user(db, UserRegister(
        ...     email="alice@example.com", username="alice", password="secret1"
        ... ))
        >>> user.referral_code
        'ALI-7KQ2Z'
    """
    repo = UserRepository(User, db)

    if await repo.exists_by_email(user_in.email):
        raise ConflictError("Email already registered")
    if await repo.exists_by_username(user_in.username):
        raise ConflictError("Username already taken")

    referral_code = await generate_unique_referral_code(db, user_in.username)
    user = await repo.create(
        obj_in={
            "email": user_in.email,
            "username": user_in.username,
            "hashed_password": get_password_hash(user_in.password),
            "referral_code": referral_code,
            "is_superuser": is_superuser,
        }
    )
    logger.info(f"Registered user {user.username} with referral code {referral_code}")
    return user


async def set_password(db: AsyncSession, user_id: int, password: str) -> User:
    """Replace a user's password (administrator action)."""
    user = await get_user(db, user_id)
    repo = UserRepository(User, db)
    user = await repo.update(db_obj=user, obj_in={"hashed_password": get_password_hash(password)})
    logger.info(f"Password of user {user_id} changed by an administrator")
    return user


async def authenticate_user(
    db: AsyncSession,
    username_or_email: str,
    password: str,
) -> User:
    """Authenticate a user by username/email and password.

    Args:
        db: Async database session
        username_or_email: Username or email address
        password: Plain text password to verify

    Returns:
        User: Authenticated user instance

    Raises:
        AuthenticationError: If the credentials are invalid or the user is
            inactive
    """
    repo = UserRepository(User, db)
    user = await repo.get_by_username_or_email(username_or_email)

    if not user or not verify_password(password, user.hashed_password):
        raise AuthenticationError("Incorrect username or password")

    if not user.is_active:
        raise AuthenticationError("Inactive user")

    return user


async def create_user_token(db: AsyncSession, username_or_email: str, password: str) -> str:
    """Authenticate a user and create a JWT access token.

    Raises:
        AuthenticationError: If the credentials are invalid
    """
    user = await authenticate_user(db, username_or_email, password)

    access_token_expires = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    return create_access_token(
        data={"sub": user.username},
        expires_delta=access_token_expires,
    )
