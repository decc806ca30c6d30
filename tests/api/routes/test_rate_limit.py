"""Tests for rate limiting functionality."""

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from tonswap.core.config import settings
from tonswap.core.rate_limit import retry_after_seconds
from tonswap.models.user import User

pytestmark = pytest.mark.integration


async def exhaust_login(client: AsyncClient, attempts: int = 5) -> None:
    for i in range(attempts):
        response = await client.post(
            "/api/v1/auth/login",
            data={"username": "testuser", "password": "TestPass123"},
        )
        assert response.status_code != 429, f"Request {i + 1} was rate limited too early"


async def test_rate_limit_enforced_on_login(client: AsyncClient, test_user: User) -> None:
    """Test that rate limit is enforced on login endpoint."""
    # AUTH_RATE_LIMIT = "5/minute"
    await exhaust_login(client)

    response = await client.post(
        "/api/v1/auth/login",
        data={"username": "testuser", "password": "TestPass123"},
    )
    assert response.status_code == 429
    data = response.json()
    assert "rate limit" in data["detail"].lower()
    assert data["error_code"] == "RATE_LIMITED"
    assert data["retry_after"] == 60
    assert response.headers["Retry-After"] == "60"


async def test_rate_limit_enforced_on_register(client: AsyncClient) -> None:
    """Test that rate limit is enforced on register endpoint."""
    for i in range(5):
        response = await client.post(
            "/api/v1/auth/register",
            json={
                "email": f"test{i}@example.com",
                "username": f"testuser{i}",
                "password": "testpass123",
            },
        )
        assert response.status_code == 201

    response = await client.post(
        "/api/v1/auth/register",
        json={
            "email": "test99@example.com",
            "username": "testuser99",
            "password": "testpass123",
        },
    )
    assert response.status_code == 429


async def test_rate_limit_per_endpoint(
    client: AsyncClient, test_user: User, auth_headers: dict[str, str]
) -> None:
    """Test that different endpoints have independent rate limits."""
    await exhaust_login(client)

    response = await client.post(
        "/api/v1/auth/login",
        data={"username": "testuser", "password": "TestPass123"},
    )
    assert response.status_code == 429

    # /me has no limit of its own
    response = await client.get("/api/v1/auth/me", headers=auth_headers)
    assert response.status_code == 200


async def test_swap_limit_independent_of_auth_limit(
    client: AsyncClient, seeded_db: AsyncSession, test_user: User, wallet_address
) -> None:
    await exhaust_login(client)

    response = await client.post(
        "/api/v1/swaps/",
        json={"wallet_address": wallet_address, "amount": "1", "signed_transfer": "te6cc"},
    )
    assert response.status_code == 201


async def test_rate_limit_config() -> None:
    assert isinstance(settings.RATE_LIMIT_ENABLED, bool)
    assert settings.AUTH_RATE_LIMIT == "5/minute"


@pytest.mark.unit
@pytest.mark.parametrize(
    "detail,expected",
    [
        ("5 per 1 minute", 60),
        ("20 per 1 minute", 60),
        ("100 per 1 hour", 3600),
        ("10 per 30 seconds", 30),
        ("something else", 60),
    ],
)
def test_retry_after_seconds(detail: str, expected: int) -> None:
    assert retry_after_seconds(detail) == expected
