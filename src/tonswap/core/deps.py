"""Dependencies for FastAPI routes.

Authentication resolves the bearer token to a stored user; the aliases at the
bottom are what route handlers declare.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession

from tonswap.core.security import get_token_subject
from tonswap.db.session import get_db
from tonswap.models.user import User
from tonswap.repositories.user import UserRepository
from tonswap.services.transfer_gateway import TonCenterGateway, TransferGateway

# OAuth2 scheme for extracting token from Authorization header
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login")


async def get_current_user(
    token: Annotated[str, Depends(oauth2_scheme)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User:
    """
    Resolve the bearer token to its user.

    Raises:
        HTTPException: 401 if the token is invalid, expired or names a user
            that no longer exists
    """
    username = get_token_subject(token)
    user = await UserRepository(User, db).get_by_username(username) if username else None

    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


async def get_current_active_user(
    current_user: Annotated[User, Depends(get_current_user)],
) -> User:
    """
    Reject deactivated accounts.

    Raises:
        HTTPException: 400 if the user is inactive
    """
    if not current_user.is_active:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Inactive user")
    return current_user


async def get_current_superuser(
    current_user: Annotated[User, Depends(get_current_active_user)],
) -> User:
    """
    Require an administrator.

    Rate, voucher card, commission and password changes go through this.

    Raises:
        HTTPException: 403 if the user is not a superuser
    """
    if not current_user.is_superuser:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="The user doesn't have enough privileges",
        )
    return current_user


async def verify_user_access(
    user_id: int,
    current_user: Annotated[User, Depends(get_current_active_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User:
    """
    Load a user the caller is allowed to see.

    Users may access their own record (profile, referral code, referral
    history); superusers may access any record.

    Raises:
        HTTPException: 403 if access is not allowed, 404 if the user does not
            exist
    """
    if user_id != current_user.id and not current_user.is_superuser:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized to access this user",
        )

    user = await UserRepository(User, db).get(user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


@lru_cache
def get_transfer_gateway() -> TransferGateway:
    """Transfer gateway shared by all requests (overridden in tests)."""
    return TonCenterGateway()


CurrentActiveUser = Annotated[User, Depends(get_current_active_user)]
CurrentSuperUser = Annotated[User, Depends(get_current_superuser)]
AccessibleUser = Annotated[User, Depends(verify_user_access)]
Gateway = Annotated[TransferGateway, Depends(get_transfer_gateway)]
