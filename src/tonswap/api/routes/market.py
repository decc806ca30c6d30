"""Market overview routes."""

from fastapi import APIRouter

from tonswap.schemas.market import Coin
from tonswap.services.market_service import fetch_ton_ecosystem_coins

router = APIRouter()


@router.get("/coins", response_model=list[Coin])
async def list_ton_coins() -> list[Coin]:
    """TON ecosystem coins above the market cap floor, ranked by market cap.

    Served from cache when fresh; falls back to a static list when the market
    data provider is unavailable.
    """
    return await fetch_ton_ecosystem_coins()
