"""Exchange rate routes."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from tonswap.core.deps import CurrentSuperUser
from tonswap.db.session import get_db, transactional
from tonswap.models.exchange_rate import ExchangeRate
from tonswap.schemas.exchange_rate import (
    ExchangeRateResponse,
    ExchangeRateUpdate,
    ResolvedRateResponse,
)
from tonswap.services import rate_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/", response_model=list[ExchangeRateResponse])
async def list_rates(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[ExchangeRate]:
    """List all stored exchange rates.

    Example:
        GET /api/v1/rates
    """
    return await rate_service.list_exchange_rates(db)


@router.get("/{pair}", response_model=ResolvedRateResponse)
async def get_rate(
    pair: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ResolvedRateResponse:
    """Get the rate used to price a pair.

    Pairs without a stored rate return their built-in default with
    ``is_default`` set; this endpoint never answers 404.

    Example:
        GET /api/v1/rates/TON_USDT
    """
    pair = pair.upper()
    rate, is_default = await rate_service.resolve_exchange_rate(db, pair)
    return ResolvedRateResponse(pair=pair, rate=rate, is_default=is_default)


@router.put("/{pair}", response_model=ExchangeRateResponse)
async def update_rate(
    pair: str,
    rate_update: ExchangeRateUpdate,
    current_user: CurrentSuperUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ExchangeRate:
    """Set the rate of a pair (superuser only).

    Raises:
        ValidationError: 400 if the rate is zero or negative; the stored rate
            is kept

    Example:
        PUT /api/v1/rates/TON_USDT
        {"rate": "3.6"}
    """
    pair = pair.upper()
    logger.info(f"User {current_user.username} updating rate {pair}")

    async with transactional(db):
        exchange_rate = await rate_service.update_exchange_rate(db, pair, rate_update.rate)
    return exchange_rate
