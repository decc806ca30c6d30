"""Tests for health endpoints."""

from unittest.mock import patch

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.integration


async def test_health(client: AsyncClient):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "service": "TON Swap API"}


async def test_database_health(client: AsyncClient):
    response = await client.get("/health/db")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "database": "connected"}


async def test_cache_health_memory_backend(client: AsyncClient):
    """Test the in-process fallback cache counts as healthy."""
    response = await client.get("/health/cache")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["cache"]["backend"] == "memory"


async def test_cache_health_redis(client: AsyncClient):
    with patch("tonswap.api.routes.health.get_cache_stats") as mock_stats:
        mock_stats.return_value = {"enabled": True, "backend": "redis", "size": 1}

        response = await client.get("/health/cache")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["cache"]["size"] == 1


async def test_cache_health_error(client: AsyncClient):
    """Test cache health endpoint when there's an error getting stats."""
    with patch("tonswap.api.routes.health.get_cache_stats") as mock_stats:
        mock_stats.return_value = {"enabled": False, "error": "Connection failed"}

        response = await client.get("/health/cache")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "disabled"
    assert data["cache"]["error"] == "Connection failed"
