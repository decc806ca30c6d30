"""Market data schemas."""

from pydantic import BaseModel


class Coin(BaseModel):
    """Coin listed in the TON ecosystem market overview."""

    id: str
    name: str
    symbol: str
    image: str | None = None
    current_price: float
    market_cap: float
    price_change_percentage_24h: float | None = None
    total_volume: float | None = None
    rank: int
