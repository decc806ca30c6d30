"""User endpoints: profiles, referral settings and referral history."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from tonswap.core.constants import APIConstants
from tonswap.core.deps import AccessibleUser, CurrentSuperUser
from tonswap.db.session import get_db, transactional
from tonswap.models.referral import ReferralTransaction
from tonswap.models.user import User
from tonswap.schemas.auth import MessageResponse
from tonswap.schemas.user import (
    CommissionRateUpdate,
    PasswordUpdate,
    ReferralCodeUpdate,
    ReferralTransactionResponse,
    UserResponse,
)
from tonswap.services import referral_service, user_service

router = APIRouter()


@router.get("/", response_model=list[UserResponse])
async def get_users(
    current_user: CurrentSuperUser,
    db: Annotated[AsyncSession, Depends(get_db)],
    skip: int = Query(0, ge=0),
    limit: int = Query(APIConstants.DEFAULT_PAGE_SIZE, ge=1, le=APIConstants.MAX_PAGE_SIZE),
) -> list[User]:
    """
    Get all users with their referral totals (superuser only).

    Args:
        current_user: The authenticated superuser (from dependency)
        db: Database session
        skip: Number of records to skip (pagination)
        limit: Maximum number of records to return

    Returns:
        List of users
    """
    return await user_service.list_users(db, skip=skip, limit=limit)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user: AccessibleUser) -> User:
    """
    Get user by ID.

    Users can only view their own profile unless they are a superuser.
    """
    return user


@router.get("/{user_id}/referrals", response_model=list[ReferralTransactionResponse])
async def get_user_referrals(
    user: AccessibleUser,
    db: Annotated[AsyncSession, Depends(get_db)],
    skip: int = Query(0, ge=0),
    limit: int = Query(APIConstants.DEFAULT_PAGE_SIZE, ge=1, le=APIConstants.MAX_PAGE_SIZE),
) -> list[ReferralTransaction]:
    """
    Get the commission history of a user, newest first.

    Each entry keeps the commission rate that applied when it was recorded.
    """
    return await referral_service.get_referral_transactions(db, user.id, skip=skip, limit=limit)


@router.patch("/{user_id}/commission-rate", response_model=UserResponse)
async def update_commission_rate(
    user_id: int,
    rate_update: CommissionRateUpdate,
    current_user: CurrentSuperUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User:
    """
    Set a user's commission rate (superuser only).

    Only referrals recorded after the change use the new rate.

    Raises:
        NotFoundError: 404 if the user does not exist
    """
    async with transactional(db):
        user = await referral_service.update_commission_rate(
            db, user_id, rate_update.commission_rate
        )
    return user


@router.patch("/{user_id}/referral-code", response_model=UserResponse)
async def update_referral_code(
    user: AccessibleUser,
    code_update: ReferralCodeUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User:
    """
    Change a referral code.

    Users change their own code; superusers can change anyone's.

    Raises:
        ValidationError: 400 if the code is shorter than 5 characters or has
            characters other than letters, digits and hyphens
        ConflictError: 409 if another user already has the code
    """
    async with transactional(db):
        user = await referral_service.update_referral_code(db, user.id, code_update.referral_code)
    return user


@router.put("/{user_id}/password", response_model=MessageResponse)
async def set_user_password(
    user_id: int,
    password_update: PasswordUpdate,
    current_user: CurrentSuperUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> MessageResponse:
    """
    Set a user's password (superuser only).

    Raises:
        NotFoundError: 404 if the user does not exist
    """
    async with transactional(db):
        await user_service.set_password(db, user_id, password_update.password)
    return MessageResponse(message="Password updated successfully")
