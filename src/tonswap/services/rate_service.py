"""Rate resolution and administration.

Exchange rates are stored per pair ("TON_USDT") and overwritten in place by
administrators. Resolving a pair never fails: when no rate is stored, or the
store cannot be read, the pair's built-in default is returned.

Voucher rate cards are administered here as well, since both are the
price inputs of a swap.
"""

import logging
from decimal import Decimal

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from tonswap.core.config import settings
from tonswap.core.constants import RateConstants, VoucherConstants
from tonswap.core.exceptions import NotFoundError, ValidationError
from tonswap.models.exchange_rate import ExchangeRate
from tonswap.models.voucher import VoucherRate
from tonswap.repositories.exchange_rate import ExchangeRateRepository
from tonswap.repositories.voucher import VoucherRateRepository

logger = logging.getLogger(__name__)


def make_pair(base: str, quote: str) -> str:
    """Build a pair identifier, e.g. ``make_pair("ton", "usdt") == "TON_USDT"``."""
    return f"{base.strip().upper()}{RateConstants.PAIR_SEPARATOR}{quote.strip().upper()}"


def default_rate(pair: str) -> Decimal:
    """Built-in rate of a pair; pairs without their own default use TON/USDT's."""
    return RateConstants.DEFAULT_RATES.get(
        pair, RateConstants.DEFAULT_RATES[RateConstants.FALLBACK_PAIR]
    )


async def resolve_exchange_rate(db: AsyncSession, pair: str) -> tuple[Decimal, bool]:
    """Resolve a pair's rate and tell whether the default was used.

    Returns:
        Tuple of (rate, is_default)
    """
    repo = ExchangeRateRepository(ExchangeRate, db)

    try:
        stored = await repo.get_by_pair(pair)
    except SQLAlchemyError as e:
        logger.error(f"Failed to read exchange rate for {pair}, using default: {e}", exc_info=True)
        return default_rate(pair), True

    if stored is None or stored.rate is None or stored.rate <= 0:
        logger.debug(f"No stored rate for {pair}, using default")
        return default_rate(pair), True

    return Decimal(stored.rate), False


async def get_exchange_rate(db: AsyncSession, pair: str) -> Decimal:
    """Get the rate used to price a pair.

    Args:
        db: Async database session
        pair: Pair identifier, e.g. "TON_USDT"

    Returns:
        The stored rate, or the pair default when none is stored. Always
        positive.

    Example:
        >>> rate = await get_exchange_rate(db, "TON_USDT")
        >>> rate
        Decimal('3.5')
    """
    rate, _ = await resolve_exchange_rate(db, pair)
    return rate


async def update_exchange_rate(db: AsyncSession, pair: str, rate: Decimal) -> ExchangeRate:
    """Overwrite a pair's rate, inserting the pair when it is new.

    Args:
        db: Async database session
        pair: Pair identifier
        rate: New rate, quote units per base unit

    Returns:
        The stored rate (flushed, committed by the caller)

    Raises:
        ValidationError: If ``rate`` is zero or negative; the stored rate is
            left untouched
    """
    if rate <= 0:
        raise ValidationError(f"Exchange rate must be greater than zero (got {rate})")

    repo = ExchangeRateRepository(ExchangeRate, db)
    exchange_rate = await repo.upsert(pair, rate)
    logger.info(f"Exchange rate {pair} set to {rate}")
    return exchange_rate


async def list_exchange_rates(db: AsyncSession) -> list[ExchangeRate]:
    repo = ExchangeRateRepository(ExchangeRate, db)
    return await repo.get_all()


async def list_voucher_rates(db: AsyncSession) -> list[VoucherRate]:
    repo = VoucherRateRepository(VoucherRate, db)
    return await repo.get_all()


async def get_voucher_rate(db: AsyncSession, voucher_rate_id: int) -> VoucherRate:
    """Get a voucher rate card.

    Raises:
        NotFoundError: If no card has this id
    """
    repo = VoucherRateRepository(VoucherRate, db)
    voucher_rate = await repo.get(voucher_rate_id)
    if voucher_rate is None:
        raise NotFoundError(f"Voucher rate {voucher_rate_id} not found")
    return voucher_rate


async def update_voucher_bonus(db: AsyncSession, voucher_rate_id: int, bonus: Decimal) -> VoucherRate:
    """Change the bonus percentage of a rate card.

    Vouchers that were already bought keep the bonus they were sold with.

    Raises:
        ValidationError: If ``bonus`` is not in (0, 100]
        NotFoundError: If no card has this id
    """
    if bonus <= 0 or bonus > VoucherConstants.MAX_BONUS_PERCENT:
        raise ValidationError(
            f"Voucher bonus must be greater than 0 and at most "
            f"{VoucherConstants.MAX_BONUS_PERCENT} percent"
        )

    voucher_rate = await get_voucher_rate(db, voucher_rate_id)
    repo = VoucherRateRepository(VoucherRate, db)
    voucher_rate = await repo.update(db_obj=voucher_rate, obj_in={"bonus": bonus})
    logger.info(f"Voucher rate '{voucher_rate.name}' bonus set to {bonus}%")
    return voucher_rate


async def initialize_defaults(db: AsyncSession) -> None:
    """Seed default exchange rates and voucher rate cards.

    Only missing pairs and cards are inserted, so rates already edited by an
    administrator are left as they are. Called once at startup.
    """
    rate_repo = ExchangeRateRepository(ExchangeRate, db)
    for pair, rate in RateConstants.DEFAULT_RATES.items():
        if await rate_repo.get_by_pair(pair) is None:
            await rate_repo.create(obj_in={"pair": pair, "rate": rate})
            logger.info(f"Seeded default exchange rate {pair}={rate}")

    voucher_repo = VoucherRateRepository(VoucherRate, db)
    for card in VoucherConstants.DEFAULT_VOUCHER_RATES:
        name = str(card["name"])
        if await voucher_repo.get_by_name(name) is None:
            await voucher_repo.create(
                obj_in={**card, "transaction_limit": settings.VOUCHER_TRANSACTION_LIMIT}
            )
            logger.info(f"Seeded voucher rate '{name}'")
