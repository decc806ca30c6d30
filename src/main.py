"""FastAPI application entry point."""

import logging
import logging.config
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded

from tonswap.api.routes import (
    auth,
    health,
    market,
    rates,
    swaps,
    transactions,
    users,
    vouchers,
    wallets,
)
from tonswap.core.cache import configure_cache
from tonswap.core.config import settings
from tonswap.core.exceptions import AppException, app_exception_handler
from tonswap.core.middleware import RequestLoggingMiddleware
from tonswap.core.rate_limit import limiter, rate_limit_exceeded_handler
from tonswap.db.base import Base
from tonswap.db.session import AsyncSessionLocal, engine, transactional
from tonswap.services.rate_service import initialize_defaults

# Configure logging
logging.config.dictConfig(settings.LOGGING_CONFIG)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan events."""
    logger.info(f"Starting {settings.APP_NAME} ({settings.ENVIRONMENT})")

    # Create tables (use Alembic in production)
    if settings.ENVIRONMENT == "development":
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    # Seed default pair rates and voucher rate cards
    async with AsyncSessionLocal() as session:
        async with transactional(session):
            await initialize_defaults(session)

    # Market data cache: Redis when reachable, process memory otherwise
    configure_cache()

    yield

    logger.info("Shutting down application")
    await engine.dispose()


app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    lifespan=lifespan,
)

# Add rate limiter to app state
app.state.limiter = limiter

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_origin_regex=settings.CORS_ORIGIN_REGEX,
    allow_credentials=settings.CORS_CREDENTIALS,
    allow_methods=settings.CORS_METHODS,
    allow_headers=settings.CORS_HEADERS,
)

# Middleware is applied in reverse order, so request logging is the outermost layer
app.add_middleware(RequestLoggingMiddleware)

# Register exception handlers
app.add_exception_handler(AppException, app_exception_handler)  # type: ignore[arg-type]
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)  # type: ignore[arg-type]

# Include routers
app.include_router(health.router, tags=["health"])
app.include_router(auth.router, prefix="/api/v1/auth", tags=["auth"])
app.include_router(users.router, prefix="/api/v1/users", tags=["users"])
app.include_router(rates.router, prefix="/api/v1/rates", tags=["rates"])
app.include_router(vouchers.router, prefix="/api/v1/vouchers", tags=["vouchers"])
app.include_router(wallets.router, prefix="/api/v1/wallets", tags=["wallets"])
app.include_router(swaps.router, prefix="/api/v1/swaps", tags=["swaps"])
app.include_router(transactions.router, prefix="/api/v1/transactions", tags=["transactions"])
app.include_router(market.router, prefix="/api/v1/market", tags=["market"])
