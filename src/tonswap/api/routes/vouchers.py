"""Voucher routes: rate cards, purchases and a wallet's active voucher."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from tonswap.core.config import settings
from tonswap.core.deps import CurrentSuperUser, Gateway
from tonswap.core.rate_limit import limiter
from tonswap.db.session import get_db, transactional
from tonswap.models.voucher import ActiveVoucher, VoucherRate
from tonswap.schemas.voucher import (
    ActiveVoucherResponse,
    VoucherPurchaseRequest,
    VoucherRateResponse,
    VoucherRateUpdate,
)
from tonswap.services import rate_service, voucher_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/", response_model=list[VoucherRateResponse])
async def list_voucher_rates(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[VoucherRate]:
    """List the voucher rate cards on sale."""
    return await rate_service.list_voucher_rates(db)


@router.patch("/{voucher_rate_id}", response_model=VoucherRateResponse)
async def update_voucher_rate(
    voucher_rate_id: int,
    voucher_update: VoucherRateUpdate,
    current_user: CurrentSuperUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> VoucherRate:
    """Change the bonus of a rate card (superuser only).

    Raises:
        ValidationError: 400 if the bonus is not in (0, 100]
        NotFoundError: 404 if the card does not exist
    """
    async with transactional(db):
        voucher_rate = await rate_service.update_voucher_bonus(
            db, voucher_rate_id, voucher_update.bonus
        )
    return voucher_rate


@router.post(
    "/purchase",
    response_model=ActiveVoucherResponse,
    status_code=status.HTTP_201_CREATED,
)
@limiter.limit(settings.SWAP_RATE_LIMIT)
async def purchase_voucher(
    request: Request,
    purchase: VoucherPurchaseRequest,
    gateway: Gateway,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ActiveVoucher:
    """Buy a voucher with a wallet-signed payment.

    The voucher replaces the wallet's previous one, if any.

    Raises:
        NotFoundError: 404 if the card does not exist
        ExternalAPIError: 503 if the payment is rejected or expires
    """
    return await voucher_service.purchase_voucher(db, gateway, purchase)


@router.get("/active/{wallet_address}", response_model=ActiveVoucherResponse | None)
async def get_active_voucher(
    wallet_address: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ActiveVoucher | None:
    """Get the voucher boosting a wallet's swaps, or null when it has none."""
    return await voucher_service.get_active_voucher(db, wallet_address)
