"""Async engine, session factory and unit-of-work helpers."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from tonswap.core.config import settings

logger = logging.getLogger(__name__)

engine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DB_ECHO,
    pool_size=settings.DB_POOL_SIZE,
    max_overflow=settings.DB_MAX_OVERFLOW,
    pool_timeout=settings.DB_POOL_TIMEOUT,
    pool_recycle=settings.DB_POOL_RECYCLE,
    pool_pre_ping=True,
)

AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Request-scoped session: committed after the handler returns, rolled back if it raises."""
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


@asynccontextmanager
async def transactional(
    db: AsyncSession,
    *,
    commit: bool = True,
) -> AsyncGenerator[AsyncSession, None]:
    """Run a block of writes as one unit.

    A confirmed swap increments the voucher, accrues the referral, adds wallet
    volume and records the transaction inside one ``transactional`` block, so
    either all of it lands or none of it does.

    With ``commit=False`` the block only guarantees the rollback and leaves the
    commit to the caller (``get_db`` in request handlers).

        async with transactional(db):
            await consume_voucher(db, voucher)
            await record_transaction(db, address, amount, details)
    """
    try:
        yield db
        if commit:
            await db.commit()
    except Exception as exc:
        await db.rollback()
        logger.warning(f"Rolled back transaction after {type(exc).__name__}: {exc}")
        raise
