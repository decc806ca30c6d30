"""Application-wide constants.

Keeps the pricing defaults, voucher rate cards and amount formatting thresholds
in one place so services and tests agree on the same values.
"""

from decimal import Decimal


class RateConstants:
    """Constants for currency-pair exchange rates."""

    # Pair identifiers use "{BASE}_{QUOTE}"
    PAIR_SEPARATOR = "_"
    TON_USDT = "TON_USDT"
    TON_FUS = "TON_FUS"

    # Returned whenever a pair has no stored rate
    DEFAULT_RATES: dict[str, Decimal] = {
        TON_USDT: Decimal("3.5"),
        TON_FUS: Decimal("1.2"),
    }

    # Unknown pairs without their own default resolve to the TON/USDT default
    FALLBACK_PAIR = TON_USDT

    # Swaps are paid with a native TON transfer
    SEND_CURRENCY = "TON"


class VoucherConstants:
    """Constants for bonus vouchers."""

    DEFAULT_TRANSACTION_LIMIT = 3

    # Rate cards seeded on first start
    DEFAULT_VOUCHER_RATES: list[dict[str, object]] = [
        {"name": "Standard Bonus", "bonus": Decimal("4"), "price": Decimal("0.1")},
        {"name": "Premium Bonus", "bonus": Decimal("7.5"), "price": Decimal("0.1")},
    ]

    MAX_BONUS_PERCENT = Decimal("100")


class ReferralConstants:
    """Constants for referral codes and commissions."""

    MIN_CODE_LENGTH = 5
    MAX_CODE_LENGTH = 50
    CODE_PATTERN = r"^[A-Za-z0-9-]+$"

    # Generated codes look like "ALI-7KQ2Z"
    GENERATED_PREFIX_LENGTH = 3
    GENERATED_SUFFIX_LENGTH = 5
    MAX_GENERATION_ATTEMPTS = 10

    MIN_COMMISSION_RATE = Decimal("0")
    MAX_COMMISSION_RATE = Decimal("100")


class AmountConstants:
    """Constants for amount conversion and display."""

    NANO_PER_TON = 1_000_000_000

    # (upper bound, decimal places) checked in order; anything larger uses 2
    FORMAT_THRESHOLDS: tuple[tuple[Decimal, int], ...] = (
        (Decimal("0.01"), 6),
        (Decimal("1"), 4),
        (Decimal("10"), 3),
    )
    DEFAULT_DECIMAL_PLACES = 2


class APIConstants:
    """Constants for API behavior, limits, and defaults."""

    DEFAULT_PAGE_SIZE = 100
    MAX_PAGE_SIZE = 1000
    DEFAULT_RECENT_TRANSACTIONS = 5
    MAX_RECENT_TRANSACTIONS = 100
