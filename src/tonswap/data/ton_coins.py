"""Static TON ecosystem coin list.

Served by the market overview when the market data API cannot be reached
and nothing is cached yet. Figures are indicative only.
"""

from typing import Any

FALLBACK_TON_COINS: list[dict[str, Any]] = [
    {
        "id": "the-open-network",
        "name": "Toncoin",
        "symbol": "ton",
        "image": "https://assets.coingecko.com/coins/images/17980/large/ton_symbol.png",
        "current_price": 6.12,
        "market_cap": 21_053_000_000,
        "price_change_percentage_24h": 2.5,
        "total_volume": 58_000_000,
    },
    {
        "id": "tegro",
        "name": "Tegro",
        "symbol": "tgr",
        "image": "https://assets.coingecko.com/coins/images/26631/large/tgr.png",
        "current_price": 0.0142,
        "market_cap": 14_200_000,
        "price_change_percentage_24h": -1.2,
        "total_volume": 1_200_000,
    },
    {
        "id": "ton-doge",
        "name": "TON DOGE",
        "symbol": "tondoge",
        "image": "https://assets.coingecko.com/coins/images/29069/large/ton_doge.png",
        "current_price": 0.00000352,
        "market_cap": 8_520_000,
        "price_change_percentage_24h": 5.8,
        "total_volume": 520_000,
    },
    {
        "id": "notcoin",
        "name": "Notcoin",
        "symbol": "not",
        "image": "https://assets.coingecko.com/coins/images/31457/large/not.png",
        "current_price": 0.0112,
        "market_cap": 7_800_000,
        "price_change_percentage_24h": -3.4,
        "total_volume": 420_000,
    },
    {
        "id": "tonup",
        "name": "Tonup",
        "symbol": "tonup",
        "image": "https://assets.coingecko.com/coins/images/31458/large/tonup.png",
        "current_price": 0.00000124,
        "market_cap": 6_240_000,
        "price_change_percentage_24h": 1.7,
        "total_volume": 180_000,
    },
    {
        "id": "ton-token",
        "name": "TON Token",
        "symbol": "ton",
        "image": "https://assets.coingecko.com/coins/images/31459/large/ton_token.png",
        "current_price": 0.0023,
        "market_cap": 5_800_000,
        "price_change_percentage_24h": 0.8,
        "total_volume": 120_000,
    },
]
