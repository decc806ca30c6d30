"""Integration tests for transaction log endpoints."""

from decimal import Decimal

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from tonswap.models.user import User
from tonswap.schemas.transaction import SwapDetails, VoucherDetails
from tonswap.services.transaction_service import record_transaction
from tonswap.services.wallet_service import connect_wallet

pytestmark = pytest.mark.integration


async def seed_transactions(db: AsyncSession, count: int = 3) -> None:
    for index in range(count):
        amount = Decimal(index + 1)
        await record_transaction(
            db,
            f"UQwallet{index}",
            amount,
            SwapDetails(
                from_currency="TON",
                to_currency="USDT",
                send_amount=amount,
                receive_amount=amount * Decimal("3.5"),
                send_rate=Decimal("3.5"),
                receive_rate=Decimal("1"),
            ),
        )
    await record_transaction(
        db,
        "UQwallet0",
        Decimal("0.1"),
        VoucherDetails(voucher_rate_id=1, voucher_name="Standard Bonus", bonus=Decimal("4")),
    )
    await connect_wallet(db, "UQwallet0")
    await db.commit()


async def test_recent_transactions(client: AsyncClient, test_db: AsyncSession):
    await seed_transactions(test_db, count=6)

    response = await client.get("/api/v1/transactions/recent")

    assert response.status_code == 200
    data = response.json()
    assert len(data) == 5
    assert data[0]["kind"] == "voucher"
    assert data[0]["details"]["voucher_name"] == "Standard Bonus"
    assert data[1]["details"]["kind"] == "swap"


async def test_recent_transactions_limit(client: AsyncClient, test_db: AsyncSession):
    await seed_transactions(test_db)

    response = await client.get("/api/v1/transactions/recent", params={"limit": 2})
    assert len(response.json()) == 2

    response = await client.get("/api/v1/transactions/recent", params={"limit": 0})
    assert response.status_code == 422


async def test_stats(
    client: AsyncClient,
    test_db: AsyncSession,
    test_superuser: User,
    superuser_auth_headers: dict[str, str],
):
    await seed_transactions(test_db)

    response = await client.get("/api/v1/transactions/stats", headers=superuser_auth_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["transaction_count"] == 4
    assert data["swap_count"] == 3
    assert data["voucher_count"] == 1
    assert Decimal(data["swap_volume"]) == Decimal("6")
    assert Decimal(data["voucher_volume"]) == Decimal("0.1")
    assert Decimal(data["total_volume"]) == Decimal("6.1")
    assert data["wallet_count"] == 1


async def test_stats_requires_superuser(
    client: AsyncClient, test_user: User, auth_headers: dict[str, str]
):
    response = await client.get("/api/v1/transactions/stats", headers=auth_headers)

    assert response.status_code == 403
