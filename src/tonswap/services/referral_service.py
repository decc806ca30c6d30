"""Referral ledger: commission bookkeeping for referred swaps.

A swap may carry a referral code. When the code belongs to a user, that user's
``referrals`` counter and ``total_commission`` grow and a ReferralTransaction
row records the commission at the rate the user had at that moment.

No deduplication is performed: every call is an unconditional increment, so a
caller that retries a swap records the referral twice.
"""

import logging
import re
import secrets
import string
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from tonswap.core.constants import ReferralConstants
from tonswap.core.exceptions import ConflictError, NotFoundError, ValidationError
from tonswap.models.referral import ReferralTransaction
from tonswap.models.user import User
from tonswap.repositories.referral import ReferralTransactionRepository
from tonswap.repositories.user import UserRepository

logger = logging.getLogger(__name__)

_CODE_RE = re.compile(ReferralConstants.CODE_PATTERN)
_CODE_ALPHABET = string.ascii_uppercase + string.digits
_HUNDRED = Decimal("100")


def calculate_commission(amount: Decimal, commission_rate: Decimal) -> Decimal:
    """``amount * commission_rate / 100``."""
    return Decimal(amount) * Decimal(commission_rate) / _HUNDRED


def validate_referral_code(code: str) -> str:
    """Check a referral code's format and return it stripped.

    Raises:
        ValidationError: If the code is shorter than the minimum length or
            contains anything but letters, digits and hyphens
    """
    code = code.strip()
    if len(code) < ReferralConstants.MIN_CODE_LENGTH:
        raise ValidationError(
            f"Referral code must be at least {ReferralConstants.MIN_CODE_LENGTH} characters long"
        )
    if len(code) > ReferralConstants.MAX_CODE_LENGTH:
        raise ValidationError(
            f"Referral code must be at most {ReferralConstants.MAX_CODE_LENGTH} characters long"
        )
    if not _CODE_RE.match(code):
        raise ValidationError("Referral code can only contain letters, numbers, and hyphens")
    return code


def generate_referral_code(username: str) -> str:
    """Generate a referral code like ``"ALI-7KQ2Z"`` from a username.

    The prefix is the first three characters of the username in upper case
    (letters and digits only, padded with "X" for very short names), followed
    by a random suffix. Uniqueness is checked by the caller.
    """
    prefix = re.sub(r"[^A-Za-z0-9]", "", username)[: ReferralConstants.GENERATED_PREFIX_LENGTH]
    prefix = prefix.upper().ljust(ReferralConstants.GENERATED_PREFIX_LENGTH, "X")
    suffix = "".join(
        secrets.choice(_CODE_ALPHABET) for _ in range(ReferralConstants.GENERATED_SUFFIX_LENGTH)
    )
    return f"{prefix}-{suffix}"


async def generate_unique_referral_code(db: AsyncSession, username: str) -> str:
    """Generate a referral code no other user has.

    Raises:
        ConflictError: If no free code was found after several attempts
    """
    repo = UserRepository(User, db)
    for _ in range(ReferralConstants.MAX_GENERATION_ATTEMPTS):
        code = generate_referral_code(username)
        if not await repo.exists_by_referral_code(code):
            return code
    raise ConflictError("Could not generate a unique referral code, please try again")


async def record_referral(
    db: AsyncSession,
    referral_code: str,
    amount: Decimal,
    referred_wallet: str,
) -> ReferralTransaction | None:
    """Credit the owner of a referral code for a referred swap.

    Args:
        db: Async database session
        referral_code: Code carried by the swap
        amount: Swap amount in TON
        referred_wallet: Address of the wallet that swapped

    Returns:
        The new ReferralTransaction, or None when no user owns the code (in
        which case nothing is written)

    Example:
        >>> entry = await record_referral(db, "ABC-12345", Decimal("2"), wallet)
        >>> entry.commission  # user at 5 %
        Decimal('0.10')
    """
    user_repo = UserRepository(User, db)
    user = await user_repo.get_by_referral_code(referral_code)
    if user is None:
        logger.warning(f"Referral code {referral_code!r} does not match any user")
        return None

    # Rate captured now; later rate changes never touch this row
    commission_rate = Decimal(user.commission_rate)
    commission = calculate_commission(amount, commission_rate)

    await user_repo.add_referral(user, commission)

    referral_repo = ReferralTransactionRepository(ReferralTransaction, db)
    entry = await referral_repo.create(
        obj_in={
            "user_id": user.id,
            "referral_code": referral_code,
            "referred_wallet": referred_wallet,
            "amount": amount,
            "commission": commission,
            "commission_rate": commission_rate,
        }
    )

    logger.info(
        f"Referral recorded for user {user.id} via {referral_code}: "
        f"{commission} TON at {commission_rate}%"
    )
    return entry


async def _get_user(db: AsyncSession, user_id: int) -> User:
    repo = UserRepository(User, db)
    user = await repo.get(user_id)
    if user is None:
        raise NotFoundError(f"User {user_id} not found")
    return user


async def update_commission_rate(db: AsyncSession, user_id: int, commission_rate: Decimal) -> User:
    """Set a user's commission rate for future referrals.

    Raises:
        ValidationError: If the rate is outside 0..100
        NotFoundError: If the user does not exist
    """
    if not (
        ReferralConstants.MIN_COMMISSION_RATE
        <= commission_rate
        <= ReferralConstants.MAX_COMMISSION_RATE
    ):
        raise ValidationError("Commission rate must be between 0 and 100")

    user = await _get_user(db, user_id)
    repo = UserRepository(User, db)
    user = await repo.update(db_obj=user, obj_in={"commission_rate": commission_rate})
    logger.info(f"Commission rate of user {user_id} set to {commission_rate}%")
    return user


async def update_referral_code(db: AsyncSession, user_id: int, referral_code: str) -> User:
    """Change a user's referral code.

    Raises:
        ValidationError: If the code is malformed
        ConflictError: If another user already has the code
        NotFoundError: If the user does not exist
    """
    referral_code = validate_referral_code(referral_code)
    user = await _get_user(db, user_id)

    repo = UserRepository(User, db)
    owner = await repo.get_by_referral_code(referral_code)
    if owner is not None and owner.id != user.id:
        raise ConflictError("This referral code is already taken")

    user = await repo.update(db_obj=user, obj_in={"referral_code": referral_code})
    logger.info(f"Referral code of user {user_id} changed to {referral_code}")
    return user


async def get_referral_transactions(
    db: AsyncSession,
    user_id: int,
    *,
    skip: int = 0,
    limit: int = 100,
) -> list[ReferralTransaction]:
    """Get a user's referral history, newest first.

    Raises:
        NotFoundError: If the user does not exist
    """
    await _get_user(db, user_id)
    repo = ReferralTransactionRepository(ReferralTransaction, db)
    return await repo.get_by_user(user_id, skip=skip, limit=limit)
