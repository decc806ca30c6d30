"""Market overview of TON ecosystem coins.

Coins are fetched from the CoinGecko markets endpoint, filtered by market cap
and ranked. Results are cached (Redis when available, process memory
otherwise). When the API fails, a static list is served.

Caching Strategy:
- ``market_coins`` key, TTL ``MARKET_CACHE_TTL_SECONDS``
- fallback data is never cached, so the next request retries the API
"""

import logging
from typing import Any

import httpx

from tonswap.core.cache import CACHE_EXPIRATION, get_cache
from tonswap.core.config import settings
from tonswap.data.ton_coins import FALLBACK_TON_COINS
from tonswap.schemas.market import Coin

logger = logging.getLogger(__name__)

CACHE_KEY = "market_coins"

_MARKET_PARAMS = {
    "vs_currency": "usd",
    "category": "ton-ecosystem",
    "order": "market_cap_desc",
    "per_page": 50,
    "page": 1,
    "sparkline": "false",
    "locale": "en",
}


def _rank_coins(raw_coins: list[dict[str, Any]], min_market_cap: float) -> list[Coin]:
    """Keep coins above the market cap floor and number them by position."""
    coins: list[Coin] = []
    for raw in raw_coins:
        market_cap = raw.get("market_cap") or 0
        if market_cap <= min_market_cap or raw.get("current_price") is None:
            continue
        coins.append(
            Coin(
                id=raw["id"],
                name=raw["name"],
                symbol=raw["symbol"],
                image=raw.get("image"),
                current_price=raw["current_price"],
                market_cap=market_cap,
                price_change_percentage_24h=raw.get("price_change_percentage_24h"),
                total_volume=raw.get("total_volume"),
                rank=len(coins) + 1,
            )
        )
    return coins


def get_fallback_coins() -> list[Coin]:
    return _rank_coins(FALLBACK_TON_COINS, 0)


async def fetch_market_data(
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> list[dict[str, Any]]:
    """Fetch raw market rows for the TON ecosystem category.

    Raises:
        httpx.HTTPError: If the request fails or returns an error status
        ValueError: If the body is not a JSON list
    """
    async with httpx.AsyncClient(timeout=15.0, transport=transport) as client:
        response = await client.get(settings.MARKET_API_URL, params=_MARKET_PARAMS)
        response.raise_for_status()

    data = response.json()
    if not isinstance(data, list):
        raise ValueError("Unexpected market data format")
    return data


async def fetch_ton_ecosystem_coins(
    *,
    use_cache: bool = True,
    transport: httpx.AsyncBaseTransport | None = None,
) -> list[Coin]:
    """Get TON ecosystem coins above the market cap floor.

    Args:
        use_cache: Serve and store the cached list
        transport: Optional httpx transport (used by tests)

    Returns:
        Coins ordered by market cap with ``rank`` starting at 1

    Example:
        >>> coins = await fetch_ton_ecosystem_coins()
        >>> coins[0].name
        'Toncoin'
    """
    cache = get_cache()
    if use_cache:
        cached = cache.get(CACHE_KEY)
        if cached is not None:
            logger.debug(f"Cache hit for {CACHE_KEY}")
            return [Coin.model_validate(item) for item in cached]

    try:
        raw_coins = await fetch_market_data(transport=transport)
    except httpx.HTTPError as e:
        logger.error(f"HTTP error fetching TON ecosystem coins: {e}")
        return get_fallback_coins()
    except ValueError as e:
        logger.error(f"Failed to parse TON ecosystem coins: {e}")
        return get_fallback_coins()

    coins = _rank_coins(raw_coins, settings.MARKET_MIN_MARKET_CAP)
    logger.info(f"Fetched {len(raw_coins)} TON ecosystem coins, {len(coins)} above market cap floor")

    if use_cache:
        cache.set(
            CACHE_KEY,
            [coin.model_dump(mode="json") for coin in coins],
            ttl=CACHE_EXPIRATION[CACHE_KEY],
        )
    return coins
