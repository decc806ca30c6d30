"""Exchange rate repository."""

from decimal import Decimal

from sqlalchemy import select

from tonswap.models.exchange_rate import ExchangeRate
from tonswap.repositories.base import BaseRepository


class ExchangeRateRepository(BaseRepository[ExchangeRate]):
    """Repository for ExchangeRate model keyed by pair identifier.

    Example:
        >>> repo = ExchangeRateRepository(ExchangeRate, db)
        >>> rate = await repo.get_by_pair("TON_USDT")
    """

    async def get_by_pair(self, pair: str) -> ExchangeRate | None:
        """Get the stored rate for a pair.

        Args:
            pair: Pair identifier, e.g. "TON_USDT"

        Returns:
            ExchangeRate if stored, None otherwise
        """
        result = await self.db.execute(select(ExchangeRate).where(ExchangeRate.pair == pair))
        return result.scalar_one_or_none()

    async def get_all(self) -> list[ExchangeRate]:
        """Get all stored rates ordered by pair."""
        result = await self.db.execute(select(ExchangeRate).order_by(ExchangeRate.pair))
        return list(result.scalars().all())

    async def upsert(self, pair: str, rate: Decimal) -> ExchangeRate:
        """Overwrite the rate of a pair, inserting it when missing.

        Args:
            pair: Pair identifier
            rate: New rate

        Returns:
            The stored rate (flushed, not yet committed)
        """
        existing = await self.get_by_pair(pair)
        if existing:
            return await self.update(db_obj=existing, obj_in={"rate": rate})
        return await self.create(obj_in={"pair": pair, "rate": rate})
