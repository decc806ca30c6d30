"""Exchange rate model for administrator-managed currency pairs."""

from decimal import Decimal

from sqlalchemy import Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from tonswap.db.base import Base, TimestampMixin


class ExchangeRate(Base, TimestampMixin):
    """Current conversion rate for a currency pair.

    There is exactly one row per pair; administrator updates overwrite it in
    place, so no rate history is kept.

    Attributes:
        pair: Pair identifier in "{BASE}_{QUOTE}" form (e.g., "TON_USDT")
        rate: Quote units per one base unit (e.g., 1 TON = 3.5 USDT means rate=3.5)
    """

    __tablename__ = "exchange_rates"

    id: Mapped[int] = mapped_column(primary_key=True)
    pair: Mapped[str] = mapped_column(String(32), unique=True, index=True)
    rate: Mapped[Decimal] = mapped_column(Numeric(18, 8))
