"""Pytest fixtures for testing."""

import asyncio
from collections.abc import AsyncGenerator
from decimal import Decimal

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from main import app
from tonswap.core.cache import clear_cache
from tonswap.core.deps import get_transfer_gateway
from tonswap.core.exceptions import ExternalAPIError
from tonswap.core.rate_limit import limiter
from tonswap.core.security import create_access_token, get_password_hash
from tonswap.db.base import Base
from tonswap.db.session import get_db
from tonswap.models.user import User
from tonswap.models.voucher import ActiveVoucher, VoucherRate, VoucherStatus
from tonswap.services.rate_service import initialize_defaults
from tonswap.services.transfer_gateway import TransferGateway, TransferReceipt, TransferRequest

# Test database URL (SQLite in-memory for fast tests)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


class FakeTransferGateway(TransferGateway):
    """Transfer gateway double that confirms, rejects or stalls transfers."""

    def __init__(self) -> None:
        self.requests: list[TransferRequest] = []
        self.fail_with: str | None = None
        self.delay: float = 0

    async def submit(self, request: TransferRequest) -> TransferReceipt:
        self.requests.append(request)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.fail_with is not None:
            raise ExternalAPIError(self.fail_with)
        return TransferReceipt(reference=f"hash-{len(self.requests)}")


@pytest.fixture(autouse=True)
def reset_limiter():
    """Reset rate limiter storage so request counts do not leak between tests."""
    limiter.reset()
    yield
    limiter.reset()


@pytest.fixture(autouse=True)
def reset_cache():
    """Start every test with an empty market data cache."""
    clear_cache()
    yield
    clear_cache()


@pytest_asyncio.fixture(scope="function")
async def test_engine():
    """Create a test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
    )

    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    # Drop all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def test_db(test_engine) -> AsyncGenerator[AsyncSession]:
    """Create a test database session."""
    async_session_maker = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    async with async_session_maker() as session:
        yield session


@pytest.fixture(scope="function")
def fake_gateway() -> FakeTransferGateway:
    """Transfer gateway that confirms every transfer unless told otherwise."""
    return FakeTransferGateway()


@pytest_asyncio.fixture(scope="function")
async def client(
    test_db: AsyncSession, fake_gateway: FakeTransferGateway
) -> AsyncGenerator[AsyncClient]:
    """Create a test client with database and transfer gateway overrides."""

    async def override_get_db() -> AsyncGenerator[AsyncSession]:
        yield test_db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_transfer_gateway] = lambda: fake_gateway

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest_asyncio.fixture(scope="function")
async def seeded_db(test_db: AsyncSession) -> AsyncSession:
    """Database with the default pair rates and voucher rate cards."""
    await initialize_defaults(test_db)
    await test_db.commit()
    return test_db


@pytest.fixture(scope="function")
def wallet_address() -> str:
    return "UQBvW8Z5huBkMJYdnfAEM5JqTNkuWX3diqYENkWsIL0XggGG"


async def _create_user(
    db: AsyncSession,
    *,
    email: str,
    username: str,
    password: str,
    referral_code: str,
    is_active: bool = True,
    is_superuser: bool = False,
    commission_rate: Decimal = Decimal("5"),
) -> User:
    user = User(
        email=email,
        username=username,
        hashed_password=get_password_hash(password),
        referral_code=referral_code,
        commission_rate=commission_rate,
        is_active=is_active,
        is_superuser=is_superuser,
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


@pytest_asyncio.fixture(scope="function")
async def test_user(test_db: AsyncSession) -> User:
    """Create a test user."""
    return await _create_user(
        test_db,
        email="test@example.com",
        username="testuser",
        password="TestPass123",
        referral_code="TES-7KQ2Z",
    )


@pytest_asyncio.fixture(scope="function")
async def referrer(test_db: AsyncSession) -> User:
    """Create a user owning referral code ABC-12345 at 5 % commission."""
    return await _create_user(
        test_db,
        email="referrer@example.com",
        username="abcreferrer",
        password="ReferPass123",
        referral_code="ABC-12345",
        commission_rate=Decimal("5"),
    )


@pytest_asyncio.fixture(scope="function")
async def test_superuser(test_db: AsyncSession) -> User:
    """Create a test superuser."""
    return await _create_user(
        test_db,
        email="admin@example.com",
        username="adminuser",
        password="AdminPass123",
        referral_code="ADM-00001",
        is_superuser=True,
    )


@pytest_asyncio.fixture(scope="function")
async def test_inactive_user(test_db: AsyncSession) -> User:
    """Create an inactive test user."""
    return await _create_user(
        test_db,
        email="inactive@example.com",
        username="inactiveuser",
        password="InactivePass123",
        referral_code="INA-00001",
        is_active=False,
    )


@pytest_asyncio.fixture(scope="function")
async def standard_voucher(seeded_db: AsyncSession, wallet_address: str) -> ActiveVoucher:
    """Unused Standard Bonus voucher (4 %, limit 3) held by ``wallet_address``."""
    voucher_rate = await seeded_db.get(VoucherRate, 1)
    assert voucher_rate is not None and voucher_rate.name == "Standard Bonus"

    voucher = ActiveVoucher(
        wallet_address=wallet_address,
        voucher_rate_id=voucher_rate.id,
        name=voucher_rate.name,
        bonus=voucher_rate.bonus,
        price=voucher_rate.price,
        used_transactions=0,
        transaction_limit=3,
        status=VoucherStatus.ACTIVE,
    )
    seeded_db.add(voucher)
    await seeded_db.commit()
    await seeded_db.refresh(voucher)
    return voucher


@pytest.fixture(scope="function")
def user_token(test_user: User) -> str:
    """Generate a valid access token for test user."""
    return create_access_token(data={"sub": test_user.username})


@pytest.fixture(scope="function")
def superuser_token(test_superuser: User) -> str:
    """Generate a valid access token for test superuser."""
    return create_access_token(data={"sub": test_superuser.username})


@pytest.fixture(scope="function")
def inactive_user_token(test_inactive_user: User) -> str:
    """Generate a valid access token for inactive user."""
    return create_access_token(data={"sub": test_inactive_user.username})


@pytest.fixture(scope="function")
def auth_headers(user_token: str) -> dict[str, str]:
    """Generate authorization headers with user token."""
    return {"Authorization": f"Bearer {user_token}"}


@pytest.fixture(scope="function")
def superuser_auth_headers(superuser_token: str) -> dict[str, str]:
    """Generate authorization headers with superuser token."""
    return {"Authorization": f"Bearer {superuser_token}"}


@pytest.fixture(scope="function")
def inactive_user_auth_headers(inactive_user_token: str) -> dict[str, str]:
    """Generate authorization headers with inactive user token."""
    return {"Authorization": f"Bearer {inactive_user_token}"}
