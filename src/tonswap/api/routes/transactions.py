"""Transaction log routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from tonswap.core.constants import APIConstants
from tonswap.core.deps import CurrentSuperUser
from tonswap.db.session import get_db
from tonswap.models.transaction import Transaction, TransactionKind
from tonswap.schemas.transaction import TransactionResponse, TransactionStats
from tonswap.services import transaction_service, wallet_service

router = APIRouter()


@router.get("/recent", response_model=list[TransactionResponse])
async def get_recent_transactions(
    db: Annotated[AsyncSession, Depends(get_db)],
    limit: int = Query(
        APIConstants.DEFAULT_RECENT_TRANSACTIONS,
        ge=1,
        le=APIConstants.MAX_RECENT_TRANSACTIONS,
    ),
) -> list[Transaction]:
    """Get the newest swaps and voucher purchases, newest first."""
    return await transaction_service.get_recent_transactions(db, limit=limit)


@router.get("/stats", response_model=TransactionStats)
async def get_transaction_stats(
    current_user: CurrentSuperUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TransactionStats:
    """Dashboard totals (superuser only).

    Volumes are in TON.
    """
    swap_count = await transaction_service.get_transaction_count(db, TransactionKind.SWAP)
    voucher_count = await transaction_service.get_transaction_count(db, TransactionKind.VOUCHER)
    swap_volume = await transaction_service.get_total_volume(db, TransactionKind.SWAP)
    voucher_volume = await transaction_service.get_total_volume(db, TransactionKind.VOUCHER)

    return TransactionStats(
        transaction_count=swap_count + voucher_count,
        swap_count=swap_count,
        voucher_count=voucher_count,
        total_volume=swap_volume + voucher_volume,
        swap_volume=swap_volume,
        voucher_volume=voucher_volume,
        wallet_count=await wallet_service.get_wallet_count(db),
    )
