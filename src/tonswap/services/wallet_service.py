"""Wallet directory.

Wallets are stored on first connection and keyed by their sanitized address.
Connecting again only refreshes ``last_active``; swaps add to
``total_swapped``. Nothing is kept in process memory: the table is the
record of which wallets have connected.
"""

import logging
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from tonswap.core.exceptions import NotFoundError, ValidationError
from tonswap.db.base import utcnow
from tonswap.models.wallet import Wallet, sanitize_address
from tonswap.repositories.wallet import WalletRepository

logger = logging.getLogger(__name__)


def wallet_key(address: str) -> str:
    """Storage key of an address.

    Raises:
        ValidationError: If the address has no letters or digits at all
    """
    key = sanitize_address(address)
    if not key:
        raise ValidationError("Wallet address is empty")
    return key


async def connect_wallet(db: AsyncSession, address: str) -> Wallet:
    """Register a wallet connection.

    Creates the wallet on its first connection, otherwise refreshes its
    ``last_active`` time.

    Args:
        db: Async database session
        address: Address as reported by the wallet

    Returns:
        The stored wallet
    """
    address = address.strip()
    repo = WalletRepository(Wallet, db)
    key = wallet_key(address)

    wallet = await repo.get(key)
    if wallet is None:
        wallet = await repo.create(
            obj_in={
                "id": key,
                "address": address,
                "last_active": utcnow(),
                "total_swapped": Decimal("0"),
            }
        )
        logger.info(f"New wallet connected: {address}")
        return wallet

    return await repo.update(db_obj=wallet, obj_in={"last_active": utcnow()})


async def add_swap_volume(db: AsyncSession, address: str, amount: Decimal) -> Wallet:
    """Add a swap's amount to the wallet's total and mark it active.

    The wallet is created first when it never connected.
    """
    repo = WalletRepository(Wallet, db)
    key = wallet_key(address)

    if not await repo.exists(key):
        await connect_wallet(db, address)

    await repo.add_volume(key, amount, utcnow())
    wallet = await get_wallet(db, address)
    await db.refresh(wallet)
    return wallet


async def get_wallet(db: AsyncSession, address: str) -> Wallet:
    """Get a wallet by address.

    Raises:
        NotFoundError: If the wallet never connected
    """
    repo = WalletRepository(Wallet, db)
    wallet = await repo.get(wallet_key(address))
    if wallet is None:
        raise NotFoundError(f"Wallet {address} not found")
    return wallet


async def list_wallets(db: AsyncSession, *, skip: int = 0, limit: int = 100) -> list[Wallet]:
    repo = WalletRepository(Wallet, db)
    return await repo.get_recent(skip=skip, limit=limit)


async def get_wallet_count(db: AsyncSession) -> int:
    repo = WalletRepository(Wallet, db)
    return await repo.count()
