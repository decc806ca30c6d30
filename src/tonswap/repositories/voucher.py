"""Voucher repositories for rate cards and purchased vouchers."""

import uuid

from sqlalchemy import select, update

from tonswap.models.voucher import ActiveVoucher, VoucherRate, VoucherStatus
from tonswap.repositories.base import BaseRepository


class VoucherRateRepository(BaseRepository[VoucherRate]):
    """Repository for VoucherRate rate cards."""

    async def get_all(self) -> list[VoucherRate]:
        """Get all rate cards ordered by id."""
        result = await self.db.execute(select(VoucherRate).order_by(VoucherRate.id))
        return list(result.scalars().all())

    async def get_by_name(self, name: str) -> VoucherRate | None:
        result = await self.db.execute(select(VoucherRate).where(VoucherRate.name == name))
        return result.scalar_one_or_none()


class ActiveVoucherRepository(BaseRepository[ActiveVoucher]):
    """Repository for vouchers bought by wallets.

    Example:
        >>> repo = ActiveVoucherRepository(ActiveVoucher, db)
        >>> voucher = await repo.get_active_for_wallet("UQDa2QRk...")
    """

    async def get_active_for_wallet(self, wallet_address: str) -> ActiveVoucher | None:
        """Get the wallet's current voucher, if it has one in the active state.

        Args:
            wallet_address: Wallet address as reported by the wallet

        Returns:
            Most recent active voucher, None when the wallet has none
        """
        result = await self.db.execute(
            select(ActiveVoucher)
            .where(
                (ActiveVoucher.wallet_address == wallet_address)
                & (ActiveVoucher.status == VoucherStatus.ACTIVE)
            )
            .order_by(ActiveVoucher.created_at.desc())
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def get_by_wallet(self, wallet_address: str) -> list[ActiveVoucher]:
        """Get every voucher a wallet ever bought, newest first."""
        result = await self.db.execute(
            select(ActiveVoucher)
            .where(ActiveVoucher.wallet_address == wallet_address)
            .order_by(ActiveVoucher.created_at.desc())
        )
        return list(result.scalars().all())

    async def replace_active(self, wallet_address: str) -> int:
        """Mark the wallet's active vouchers as replaced.

        Returns:
            Number of vouchers that were replaced
        """
        result = await self.db.execute(
            update(ActiveVoucher)
            .where(
                (ActiveVoucher.wallet_address == wallet_address)
                & (ActiveVoucher.status == VoucherStatus.ACTIVE)
            )
            .values(status=VoucherStatus.REPLACED)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount or 0

    async def increment_usage(self, voucher_id: uuid.UUID) -> bool:
        """Count one use of a voucher that still has uses left.

        The increment is a conditional UPDATE: the row only changes while
        ``used_transactions < transaction_limit`` and the voucher is active.
        A second UPDATE flips the voucher to exhausted once the count has
        reached the limit.

        Returns:
            True when a use was counted, False when the voucher had none left
        """
        result = await self.db.execute(
            update(ActiveVoucher)
            .where(
                (ActiveVoucher.id == voucher_id)
                & (ActiveVoucher.status == VoucherStatus.ACTIVE)
                & (ActiveVoucher.used_transactions < ActiveVoucher.transaction_limit)
            )
            .values(used_transactions=ActiveVoucher.used_transactions + 1)
            .execution_options(synchronize_session=False)
        )
        if not result.rowcount:
            return False

        await self.db.execute(
            update(ActiveVoucher)
            .where(
                (ActiveVoucher.id == voucher_id)
                & (ActiveVoucher.status == VoucherStatus.ACTIVE)
                & (ActiveVoucher.used_transactions >= ActiveVoucher.transaction_limit)
            )
            .values(status=VoucherStatus.EXHAUSTED)
            .execution_options(synchronize_session=False)
        )
        return True
