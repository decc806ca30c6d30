"""Swap pricing: exchange amount, voucher bonus and display formatting.

Pure functions with no database access. The voucher usage side effect of a
completed swap lives in ``voucher_service.consume_voucher``.
"""

from decimal import ROUND_HALF_UP, Decimal

from tonswap.core.constants import AmountConstants
from tonswap.models.voucher import ActiveVoucher

_HUNDRED = Decimal("100")


def base_receive_amount(send_amount: Decimal, send_rate: Decimal, receive_rate: Decimal) -> Decimal:
    """Amount received for ``send_amount`` before any bonus.

    Example:
        >>> base_receive_amount(Decimal("10"), Decimal("3.5"), Decimal("1"))
        Decimal('35')
    """
    return send_amount * send_rate / receive_rate


def voucher_applies(voucher: ActiveVoucher | None) -> bool:
    """Whether a voucher still grants its bonus."""
    return voucher is not None and voucher.is_usable


def bonus_multiplier(voucher: ActiveVoucher | None) -> Decimal:
    """``1 + bonus / 100`` for a usable voucher, exactly 1 otherwise."""
    if not voucher_applies(voucher):
        return Decimal("1")
    return Decimal("1") + Decimal(voucher.bonus) / _HUNDRED


def apply_voucher_bonus(amount: Decimal, voucher: ActiveVoucher | None) -> Decimal:
    """Apply a voucher's percentage bonus to a receive amount.

    Args:
        amount: Receive amount before the bonus
        voucher: The wallet's voucher, if any

    Returns:
        ``amount * (1 + bonus / 100)`` while the voucher has uses left,
        ``amount`` unchanged otherwise

    Example:
        >>> apply_voucher_bonus(Decimal("35"), standard_voucher)  # 4 %, 0 of 3 used
        Decimal('36.40')
    """
    if not voucher_applies(voucher):
        return amount
    return amount * bonus_multiplier(voucher)


def decimal_places_for(amount: Decimal) -> int:
    """Number of decimals used to display an amount of this magnitude."""
    for threshold, places in AmountConstants.FORMAT_THRESHOLDS:
        if amount < threshold:
            return places
    return AmountConstants.DEFAULT_DECIMAL_PLACES


def format_amount(amount: Decimal) -> str:
    """Format a receive amount for display.

    Small amounts keep more precision: 6 decimals below 0.01, 4 below 1,
    3 below 10 and 2 from 10 upwards.

    Example:
        >>> format_amount(Decimal("35"))
        '35.00'
        >>> format_amount(Decimal("0.5"))
        '0.5000'
    """
    places = decimal_places_for(amount)
    quantum = Decimal(1).scaleb(-places)
    return str(amount.quantize(quantum, rounding=ROUND_HALF_UP))
