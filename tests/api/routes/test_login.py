"""Integration tests for authentication endpoints."""

import pytest
from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tonswap.core.security import create_access_token
from tonswap.models.user import User

pytestmark = pytest.mark.integration


async def test_register_with_valid_data(client: AsyncClient, test_db: AsyncSession):
    """Test user registration with valid data."""
    response = await client.post(
        "/api/v1/auth/register",
        json={
            "email": "newuser@example.com",
            "username": "newuser",
            "password": "NewPass123",
        },
    )

    assert response.status_code == 201
    data = response.json()
    assert data["email"] == "newuser@example.com"
    assert data["username"] == "newuser"
    assert data["referral_code"].startswith("NEW-")
    assert data["referrals"] == 0
    assert float(data["commission_rate"]) == 5.0
    assert data["is_superuser"] is False
    assert "hashed_password" not in data

    # Verify user exists in database
    result = await test_db.execute(select(User).where(User.username == "newuser"))
    user = result.scalar_one_or_none()
    assert user is not None
    assert user.email == "newuser@example.com"


async def test_register_with_duplicate_email(client: AsyncClient, test_user: User):
    """Test registration with duplicate email returns 409."""
    response = await client.post(
        "/api/v1/auth/register",
        json={
            "email": "test@example.com",
            "username": "differentuser",
            "password": "NewPass123",
        },
    )

    assert response.status_code == 409
    data = response.json()
    assert "already registered" in data["detail"].lower()
    assert data["error_code"] == "CONFLICT"


async def test_register_with_duplicate_username(client: AsyncClient, test_user: User):
    """Test registration with duplicate username returns 409."""
    response = await client.post(
        "/api/v1/auth/register",
        json={
            "email": "different@example.com",
            "username": "testuser",
            "password": "NewPass123",
        },
    )

    assert response.status_code == 409
    assert "already taken" in response.json()["detail"].lower()


@pytest.mark.parametrize(
    "payload",
    [
        {"email": "not-an-email", "username": "newuser", "password": "NewPass123"},
        {"email": "new@example.com", "username": "newuser", "password": "12345"},
        {"email": "new@example.com", "username": "ab", "password": "NewPass123"},
    ],
    ids=["invalid-email", "short-password", "short-username"],
)
async def test_register_with_invalid_data(client: AsyncClient, payload):
    """Test registration with invalid data returns 422."""
    response = await client.post("/api/v1/auth/register", json=payload)

    assert response.status_code == 422


async def test_register_accepts_six_character_password(client: AsyncClient):
    response = await client.post(
        "/api/v1/auth/register",
        json={"email": "six@example.com", "username": "sixchars", "password": "abc123"},
    )

    assert response.status_code == 201


@pytest.mark.parametrize("username", ["testuser", "test@example.com"])
async def test_login(client: AsyncClient, test_user: User, username: str):
    """Test login with username or email."""
    response = await client.post(
        "/api/v1/auth/login",
        data={"username": username, "password": "TestPass123"},
    )

    assert response.status_code == 200
    data = response.json()
    assert "access_token" in data
    assert data["token_type"] == "bearer"


async def test_login_with_wrong_password(client: AsyncClient, test_user: User):
    """Test login with wrong password returns 401."""
    response = await client.post(
        "/api/v1/auth/login",
        data={"username": "testuser", "password": "WrongPassword"},
    )

    assert response.status_code == 401
    assert "incorrect" in response.json()["detail"].lower()


async def test_login_with_nonexistent_user(client: AsyncClient):
    """Test login with non-existent user returns 401."""
    response = await client.post(
        "/api/v1/auth/login",
        data={"username": "nobody", "password": "Whatever123"},
    )

    assert response.status_code == 401


async def test_login_with_inactive_user(client: AsyncClient, test_inactive_user: User):
    """Test login with inactive user returns 401."""
    response = await client.post(
        "/api/v1/auth/login",
        data={"username": "inactiveuser", "password": "InactivePass123"},
    )

    assert response.status_code == 401
    assert "inactive" in response.json()["detail"].lower()


async def test_login_token_works_for_me(client: AsyncClient, test_user: User):
    response = await client.post(
        "/api/v1/auth/login",
        data={"username": "testuser", "password": "TestPass123"},
    )
    token = response.json()["access_token"]

    response = await client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 200
    assert response.json()["username"] == "testuser"


async def test_get_current_user_me(client: AsyncClient, auth_headers: dict[str, str]):
    """Test getting current user info, including referral totals."""
    response = await client.get("/api/v1/auth/me", headers=auth_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["username"] == "testuser"
    assert data["email"] == "test@example.com"
    assert data["referral_code"] == "TES-7KQ2Z"
    assert "total_commission" in data
    assert "hashed_password" not in data


async def test_get_current_user_me_without_token(client: AsyncClient):
    """Test getting current user without token returns 401."""
    response = await client.get("/api/v1/auth/me")

    assert response.status_code == 401


async def test_get_current_user_me_with_invalid_token(client: AsyncClient):
    """Test getting current user with invalid token returns 401."""
    response = await client.get(
        "/api/v1/auth/me", headers={"Authorization": "Bearer invalid_token"}
    )

    assert response.status_code == 401


async def test_get_current_user_me_with_unknown_subject(client: AsyncClient):
    """Test a valid token for a user that no longer exists returns 401."""
    token = create_access_token(data={"sub": "ghost"})

    response = await client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401


async def test_get_current_user_me_with_inactive_user(
    client: AsyncClient, inactive_user_auth_headers: dict[str, str]
):
    """Test getting current user when inactive returns 400."""
    response = await client.get("/api/v1/auth/me", headers=inactive_user_auth_headers)

    assert response.status_code == 400
    assert "inactive" in response.json()["detail"].lower()
