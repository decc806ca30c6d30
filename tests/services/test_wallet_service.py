"""Tests for the wallet directory."""

import asyncio
from decimal import Decimal

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from tonswap.core.exceptions import NotFoundError, ValidationError
from tonswap.services.wallet_service import (
    add_swap_volume,
    connect_wallet,
    get_wallet,
    get_wallet_count,
    list_wallets,
    wallet_key,
)

pytestmark = pytest.mark.integration


@pytest.mark.unit
def test_wallet_key_strips_punctuation():
    assert wallet_key("EQD-ab_c/12") == "EQDabc12"


@pytest.mark.unit
@pytest.mark.parametrize("address", ["", "  ", "-_/"])
def test_wallet_key_rejects_empty(address):
    with pytest.raises(ValidationError):
        wallet_key(address)


async def test_first_connection_creates_wallet(test_db: AsyncSession, wallet_address):
    wallet = await connect_wallet(test_db, f"  {wallet_address} ")
    await test_db.commit()

    assert wallet.address == wallet_address
    assert wallet.id == wallet_key(wallet_address)
    assert wallet.total_swapped == Decimal("0")
    assert await get_wallet_count(test_db) == 1


async def test_reconnect_refreshes_last_active(test_db: AsyncSession, wallet_address):
    wallet = await connect_wallet(test_db, wallet_address)
    await test_db.commit()
    first_seen = wallet.last_active

    await asyncio.sleep(0.01)
    wallet = await connect_wallet(test_db, wallet_address)
    await test_db.commit()

    assert wallet.last_active > first_seen
    assert await get_wallet_count(test_db) == 1


async def test_add_swap_volume(test_db: AsyncSession, wallet_address):
    await connect_wallet(test_db, wallet_address)
    await add_swap_volume(test_db, wallet_address, Decimal("1.5"))
    wallet = await add_swap_volume(test_db, wallet_address, Decimal("2.25"))
    await test_db.commit()

    assert wallet.total_swapped == Decimal("3.75")


async def test_add_swap_volume_creates_unknown_wallet(test_db: AsyncSession):
    wallet = await add_swap_volume(test_db, "UQnever-connected", Decimal("4"))
    await test_db.commit()

    assert wallet.address == "UQnever-connected"
    assert wallet.total_swapped == Decimal("4")


async def test_get_wallet_not_found(test_db: AsyncSession):
    with pytest.raises(NotFoundError):
        await get_wallet(test_db, "UQunknown")


async def test_list_wallets_most_recent_first(test_db: AsyncSession):
    await connect_wallet(test_db, "UQfirst")
    await asyncio.sleep(0.01)
    await connect_wallet(test_db, "UQsecond")
    await test_db.commit()

    wallets = await list_wallets(test_db)

    assert [wallet.address for wallet in wallets] == ["UQsecond", "UQfirst"]
    assert len(await list_wallets(test_db, skip=1)) == 1
