"""Tests for UserRepository."""

from decimal import Decimal

import pytest

from tonswap.models.user import User
from tonswap.repositories.user import UserRepository

pytestmark = pytest.mark.integration


async def test_get_by_email(test_db, test_user):
    """Test getting user by email."""
    repo = UserRepository(User, test_db)
    user = await repo.get_by_email("test@example.com")

    assert user is not None
    assert user.id == test_user.id


async def test_get_by_email_not_found(test_db):
    """Test getting user by email when user doesn't exist."""
    repo = UserRepository(User, test_db)

    assert await repo.get_by_email("nonexistent@example.com") is None


async def test_get_by_username(test_db, test_user):
    """Test getting user by username."""
    repo = UserRepository(User, test_db)
    user = await repo.get_by_username("testuser")

    assert user is not None
    assert user.id == test_user.id


@pytest.mark.parametrize("identifier", ["testuser", "test@example.com"])
async def test_get_by_username_or_email(test_db, test_user, identifier):
    """Test getting user by username or email."""
    repo = UserRepository(User, test_db)
    user = await repo.get_by_username_or_email(identifier)

    assert user is not None
    assert user.id == test_user.id


async def test_get_by_referral_code(test_db, referrer):
    repo = UserRepository(User, test_db)

    user = await repo.get_by_referral_code("ABC-12345")
    assert user is not None
    assert user.id == referrer.id
    assert await repo.get_by_referral_code("abc-12345") is None


async def test_exists_checks(test_db, test_user):
    """Test checking if email, username and referral code exist."""
    repo = UserRepository(User, test_db)

    assert await repo.exists_by_email("test@example.com") is True
    assert await repo.exists_by_email("nonexistent@example.com") is False
    assert await repo.exists_by_username("testuser") is True
    assert await repo.exists_by_username("nonexistent") is False
    assert await repo.exists_by_referral_code("TES-7KQ2Z") is True
    assert await repo.exists_by_referral_code("NOPE-1") is False


async def test_add_referral_accumulates(test_db, referrer):
    repo = UserRepository(User, test_db)

    await repo.add_referral(referrer, Decimal("0.1"))
    user = await repo.add_referral(referrer, Decimal("0.25"))

    assert user.referrals == 2
    assert user.total_commission == Decimal("0.35")


async def test_count(test_db, test_user, referrer):
    repo = UserRepository(User, test_db)

    assert await repo.count() == 2
