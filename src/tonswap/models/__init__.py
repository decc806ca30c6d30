"""Database models.

Importing this package registers every model on ``Base.metadata``.
"""

from tonswap.models.exchange_rate import ExchangeRate
from tonswap.models.referral import ReferralTransaction
from tonswap.models.transaction import Transaction, TransactionKind
from tonswap.models.user import User
from tonswap.models.voucher import ActiveVoucher, VoucherRate, VoucherStatus
from tonswap.models.wallet import Wallet, sanitize_address

__all__ = [
    "ActiveVoucher",
    "ExchangeRate",
    "ReferralTransaction",
    "Transaction",
    "TransactionKind",
    "User",
    "VoucherRate",
    "VoucherStatus",
    "Wallet",
    "sanitize_address",
]
