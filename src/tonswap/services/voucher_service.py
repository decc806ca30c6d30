"""Voucher purchases and usage.

A wallet buys a voucher by paying the rate card price. The voucher copies the
card's bonus and grants it on the wallet's next swaps until
``transaction_limit`` uses are counted. A wallet holds at most one active
voucher: buying a new one marks the previous one as replaced.

Lifecycle::

    none -> active (0 used) -> active (n used) -> exhausted
                   \\-> replaced (on a newer purchase)
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from tonswap.db.session import transactional
from tonswap.models.voucher import ActiveVoucher
from tonswap.repositories.voucher import ActiveVoucherRepository
from tonswap.schemas.transaction import VoucherDetails
from tonswap.schemas.voucher import VoucherPurchaseRequest
from tonswap.services import rate_service, transaction_service, wallet_service
from tonswap.services.transfer_gateway import TransferGateway, TransferRequest, submit_transfer

logger = logging.getLogger(__name__)


async def get_active_voucher(db: AsyncSession, wallet_address: str) -> ActiveVoucher | None:
    """Get the voucher currently boosting a wallet's swaps, if any."""
    repo = ActiveVoucherRepository(ActiveVoucher, db)
    return await repo.get_active_for_wallet(wallet_address.strip())


async def get_wallet_vouchers(db: AsyncSession, wallet_address: str) -> list[ActiveVoucher]:
    """Get every voucher a wallet bought, including exhausted and replaced ones."""
    repo = ActiveVoucherRepository(ActiveVoucher, db)
    return await repo.get_by_wallet(wallet_address.strip())


async def consume_voucher(db: AsyncSession, voucher: ActiveVoucher) -> ActiveVoucher | None:
    """Count one use of a voucher after a completed swap.

    The swap that brings ``used_transactions`` to the limit still got the
    bonus; the voucher is exhausted afterwards and ignored from then on.

    Returns:
        The refreshed voucher, or None when it had no uses left (for example
        because a concurrent swap used the last one)
    """
    repo = ActiveVoucherRepository(ActiveVoucher, db)
    if not await repo.increment_usage(voucher.id):
        logger.warning(f"Voucher {voucher.id} has no uses left")
        return None

    await db.refresh(voucher)
    logger.info(
        f"Voucher {voucher.id} used {voucher.used_transactions}/{voucher.transaction_limit} "
        f"({voucher.status.value})"
    )
    return voucher


async def purchase_voucher(
    db: AsyncSession,
    gateway: TransferGateway,
    request: VoucherPurchaseRequest,
) -> ActiveVoucher:
    """Buy a voucher for a wallet.

    The price is transferred first; only a confirmed transfer creates the
    voucher and the ``voucher`` transaction, both in one database
    transaction.

    Args:
        db: Async database session
        gateway: Transfer gateway relaying the signed payment
        request: Wallet, rate card and signed payment

    Returns:
        The new active voucher

    Raises:
        NotFoundError: If the rate card does not exist
        ExternalAPIError: If the payment is rejected or expires
    """
    wallet_address = request.wallet_address.strip()
    voucher_rate = await rate_service.get_voucher_rate(db, request.voucher_rate_id)

    transfer = TransferRequest.build(
        source=wallet_address,
        amount=voucher_rate.price,
        signed_message=request.signed_transfer,
    )
    receipt = await submit_transfer(gateway, transfer)

    repo = ActiveVoucherRepository(ActiveVoucher, db)
    async with transactional(db):
        replaced = await repo.replace_active(wallet_address)
        if replaced:
            logger.info(f"Replaced {replaced} previous voucher(s) of {wallet_address}")

        voucher = await repo.create(
            obj_in={
                "wallet_address": wallet_address,
                "voucher_rate_id": voucher_rate.id,
                "name": voucher_rate.name,
                "bonus": voucher_rate.bonus,
                "price": voucher_rate.price,
                "used_transactions": 0,
                "transaction_limit": voucher_rate.transaction_limit,
            }
        )
        await transaction_service.record_transaction(
            db,
            wallet_address,
            voucher_rate.price,
            VoucherDetails(
                voucher_rate_id=voucher_rate.id,
                voucher_name=voucher_rate.name,
                bonus=voucher_rate.bonus,
                transfer_reference=receipt.reference or None,
            ),
        )
        await wallet_service.connect_wallet(db, wallet_address)

    logger.info(f"Voucher '{voucher_rate.name}' purchased by {wallet_address}")
    return voucher
