"""Referral transaction repository."""

from sqlalchemy import select

from tonswap.models.referral import ReferralTransaction
from tonswap.repositories.base import BaseRepository


class ReferralTransactionRepository(BaseRepository[ReferralTransaction]):
    """Repository for the append-only referral commission log."""

    async def get_by_user(
        self,
        user_id: int,
        *,
        skip: int = 0,
        limit: int = 100,
    ) -> list[ReferralTransaction]:
        """Get a user's referral transactions, newest first.

        Args:
            user_id: Referring user's id
            skip: Number of records to skip (offset)
            limit: Maximum number of records to return

        Returns:
            List of referral transactions
        """
        result = await self.db.execute(
            select(ReferralTransaction)
            .where(ReferralTransaction.user_id == user_id)
            .order_by(ReferralTransaction.created_at.desc())
            .offset(skip)
            .limit(limit)
        )
        return list(result.scalars().all())
