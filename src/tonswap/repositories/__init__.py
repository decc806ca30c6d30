"""Repository layer for database operations.

This package provides the repository pattern implementation, centralizing
all database access logic and providing a clean separation of concerns
between data access and business logic.

Repositories:
    - BaseRepository: Generic CRUD operations for any model
    - UserRepository: User lookups and referral counters
    - ExchangeRateRepository: Pair rates with upsert
    - VoucherRateRepository: Voucher rate cards
    - ActiveVoucherRepository: Purchased vouchers and their usage
    - WalletRepository: Wallet directory and swap volume
    - TransactionRepository: Payment log queries and aggregates
    - ReferralTransactionRepository: Referral commission log

Usage:
    >>> from tonswap.repositories import UserRepository
    >>> from tonswap.models.user import User
    >>>
    >>> user_repo = UserRepository(User, db)
    >>> user = await user_repo.get_by_referral_code("ABC-12345")
"""

from tonswap.repositories.base import BaseRepository
from tonswap.repositories.exchange_rate import ExchangeRateRepository
from tonswap.repositories.referral import ReferralTransactionRepository
from tonswap.repositories.transaction import TransactionRepository
from tonswap.repositories.user import UserRepository
from tonswap.repositories.voucher import ActiveVoucherRepository, VoucherRateRepository
from tonswap.repositories.wallet import WalletRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "ExchangeRateRepository",
    "VoucherRateRepository",
    "ActiveVoucherRepository",
    "WalletRepository",
    "TransactionRepository",
    "ReferralTransactionRepository",
]
