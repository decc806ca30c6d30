"""Transaction recorder and dashboard aggregates."""

import logging
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from tonswap.core.constants import APIConstants
from tonswap.models.transaction import Transaction, TransactionKind
from tonswap.repositories.transaction import TransactionRepository
from tonswap.schemas.transaction import SwapDetails, VoucherDetails

logger = logging.getLogger(__name__)


async def record_transaction(
    db: AsyncSession,
    wallet_address: str,
    amount: Decimal,
    details: SwapDetails | VoucherDetails,
) -> Transaction:
    """Append a confirmed payment to the transaction log.

    The kind is taken from the details variant, so a swap can never be
    recorded with voucher details or the other way round.

    Args:
        db: Async database session
        wallet_address: Paying wallet
        amount: Amount sent, in TON
        details: Kind-specific details

    Returns:
        The new Transaction (flushed, committed by the caller)
    """
    repo = TransactionRepository(Transaction, db)
    transaction = await repo.create(
        obj_in={
            "wallet_address": wallet_address,
            "amount": amount,
            "kind": TransactionKind(details.kind),
            "details": details.model_dump(mode="json"),
        }
    )
    logger.info(f"Recorded {details.kind} transaction {transaction.id} of {amount} TON")
    return transaction


async def get_transaction_count(db: AsyncSession, kind: TransactionKind | None = None) -> int:
    repo = TransactionRepository(Transaction, db)
    return await repo.count_by_kind(kind)


async def get_total_volume(db: AsyncSession, kind: TransactionKind | None = None) -> Decimal:
    """Total TON received, optionally for one transaction kind."""
    repo = TransactionRepository(Transaction, db)
    return await repo.sum_amount(kind)


async def get_recent_transactions(
    db: AsyncSession,
    limit: int = APIConstants.DEFAULT_RECENT_TRANSACTIONS,
) -> list[Transaction]:
    """Get the newest transactions, newest first."""
    repo = TransactionRepository(Transaction, db)
    return await repo.get_recent(limit=limit)
