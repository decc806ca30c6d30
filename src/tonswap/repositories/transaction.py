"""Transaction repository for the append-only payment log."""

from decimal import Decimal

from sqlalchemy import func, select

from tonswap.models.transaction import Transaction, TransactionKind
from tonswap.repositories.base import BaseRepository


class TransactionRepository(BaseRepository[Transaction]):
    """Repository for Transaction model.

    Transactions are only ever inserted and read.

    Example:
        >>> repo = TransactionRepository(Transaction, db)
        >>> recent = await repo.get_recent(limit=5)
    """

    async def get_recent(self, limit: int = 5) -> list[Transaction]:
        """Get the newest transactions.

        Args:
            limit: Maximum number of records to return

        Returns:
            Transactions ordered by creation time, newest first
        """
        result = await self.db.execute(
            select(Transaction).order_by(Transaction.created_at.desc()).limit(limit)
        )
        return list(result.scalars().all())

    async def get_by_wallet(self, wallet_address: str, limit: int = 100) -> list[Transaction]:
        result = await self.db.execute(
            select(Transaction)
            .where(Transaction.wallet_address == wallet_address)
            .order_by(Transaction.created_at.desc())
            .limit(limit)
        )
        return list(result.scalars().all())

    async def count_by_kind(self, kind: TransactionKind | None = None) -> int:
        """Count transactions, optionally of one kind only."""
        query = select(func.count(Transaction.id))
        if kind is not None:
            query = query.where(Transaction.kind == kind)
        result = await self.db.execute(query)
        return int(result.scalar_one())

    async def sum_amount(self, kind: TransactionKind | None = None) -> Decimal:
        """Sum transaction amounts (TON), optionally of one kind only.

        Returns:
            Total amount, ``Decimal("0")`` when there are no transactions
        """
        query = select(func.coalesce(func.sum(Transaction.amount), 0))
        if kind is not None:
            query = query.where(Transaction.kind == kind)
        result = await self.db.execute(query)
        return Decimal(str(result.scalar_one()))
