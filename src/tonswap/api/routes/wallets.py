"""Wallet directory routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from tonswap.core.constants import APIConstants
from tonswap.core.deps import CurrentSuperUser
from tonswap.db.session import get_db, transactional
from tonswap.models.wallet import Wallet
from tonswap.schemas.wallet import WalletConnect, WalletResponse
from tonswap.services import wallet_service

router = APIRouter()


@router.post("/connect", response_model=WalletResponse)
async def connect_wallet(
    wallet_in: WalletConnect,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Wallet:
    """Record a wallet connection.

    Called by the client once a wallet-connect session is established.
    """
    async with transactional(db):
        wallet = await wallet_service.connect_wallet(db, wallet_in.address)
    return wallet


@router.get("/", response_model=list[WalletResponse])
async def list_wallets(
    current_user: CurrentSuperUser,
    db: Annotated[AsyncSession, Depends(get_db)],
    skip: int = Query(0, ge=0),
    limit: int = Query(APIConstants.DEFAULT_PAGE_SIZE, ge=1, le=APIConstants.MAX_PAGE_SIZE),
) -> list[Wallet]:
    """List wallets, most recently active first (superuser only)."""
    return await wallet_service.list_wallets(db, skip=skip, limit=limit)


@router.get("/{address}", response_model=WalletResponse)
async def get_wallet(
    address: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Wallet:
    """Get a wallet's activity and total swapped volume.

    Raises:
        NotFoundError: 404 if the wallet never connected
    """
    return await wallet_service.get_wallet(db, address)
