"""Wallet repository."""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import select, update

from tonswap.models.wallet import Wallet
from tonswap.repositories.base import BaseRepository


class WalletRepository(BaseRepository[Wallet]):
    """Repository for the wallet directory.

    Wallets are keyed by their sanitized address (see ``sanitize_address``).
    """

    async def get_by_address(self, address: str) -> Wallet | None:
        result = await self.db.execute(select(Wallet).where(Wallet.address == address))
        return result.scalar_one_or_none()

    async def get_recent(self, *, skip: int = 0, limit: int = 100) -> list[Wallet]:
        """Get wallets ordered by last activity, most recent first."""
        result = await self.db.execute(
            select(Wallet).order_by(Wallet.last_active.desc()).offset(skip).limit(limit)
        )
        return list(result.scalars().all())

    async def add_volume(self, wallet_id: str, amount: Decimal, active_at: datetime) -> bool:
        """Add swapped TON to a wallet's running total.

        Returns:
            True when the wallet row exists and was updated
        """
        result = await self.db.execute(
            update(Wallet)
            .where(Wallet.id == wallet_id)
            .values(total_swapped=Wallet.total_swapped + amount, last_active=active_at)
            .execution_options(synchronize_session=False)
        )
        return bool(result.rowcount)
