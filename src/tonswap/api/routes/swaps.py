"""Swap routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from tonswap.core.config import settings
from tonswap.core.deps import Gateway
from tonswap.core.rate_limit import limiter
from tonswap.db.session import get_db
from tonswap.schemas.swap import SwapQuote, SwapQuoteRequest, SwapRequest, SwapResult
from tonswap.services import swap_service

router = APIRouter()


@router.post("/quote", response_model=SwapQuote)
async def quote_swap(
    quote_request: SwapQuoteRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> SwapQuote:
    """Price a swap.

    When ``wallet_address`` is given, the wallet's active voucher bonus is
    included.

    Example:
        POST /api/v1/swaps/quote
        {"from_currency": "TON", "to_currency": "USDT", "amount": "10"}
    """
    return await swap_service.quote_swap(
        db,
        quote_request.from_currency,
        quote_request.to_currency,
        quote_request.amount,
        quote_request.wallet_address,
    )


@router.post("/", response_model=SwapResult, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.SWAP_RATE_LIMIT)
async def execute_swap(
    request: Request,
    swap_request: SwapRequest,
    gateway: Gateway,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> SwapResult:
    """Execute a swap paid by a wallet-signed transfer.

    Raises:
        ValidationError: 400 if the amount is not positive
        ExternalAPIError: 503 if the transfer is rejected or expires; nothing
            is recorded in that case
    """
    return await swap_service.execute_swap(db, gateway, swap_request)
