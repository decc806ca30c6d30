"""Schemas package."""

from tonswap.schemas.auth import MessageResponse, Token, UserRegister
from tonswap.schemas.exchange_rate import (
    ExchangeRateResponse,
    ExchangeRateUpdate,
    ResolvedRateResponse,
)
from tonswap.schemas.market import Coin
from tonswap.schemas.swap import SwapQuote, SwapQuoteRequest, SwapRequest, SwapResult
from tonswap.schemas.transaction import (
    SwapDetails,
    TransactionDetails,
    TransactionResponse,
    TransactionStats,
    VoucherDetails,
)
from tonswap.schemas.user import (
    CommissionRateUpdate,
    PasswordUpdate,
    ReferralCodeUpdate,
    ReferralTransactionResponse,
    UserResponse,
)
from tonswap.schemas.voucher import (
    ActiveVoucherResponse,
    VoucherPurchaseRequest,
    VoucherRateResponse,
    VoucherRateUpdate,
)
from tonswap.schemas.wallet import WalletConnect, WalletResponse

__all__ = [
    # Authentication schemas
    "MessageResponse",
    "Token",
    "UserRegister",
    # User and referral schemas
    "CommissionRateUpdate",
    "PasswordUpdate",
    "ReferralCodeUpdate",
    "ReferralTransactionResponse",
    "UserResponse",
    # Rates
    "ExchangeRateResponse",
    "ExchangeRateUpdate",
    "ResolvedRateResponse",
    # Vouchers
    "ActiveVoucherResponse",
    "VoucherPurchaseRequest",
    "VoucherRateResponse",
    "VoucherRateUpdate",
    # Wallets
    "WalletConnect",
    "WalletResponse",
    # Transactions and swaps
    "SwapDetails",
    "SwapQuote",
    "SwapQuoteRequest",
    "SwapRequest",
    "SwapResult",
    "TransactionDetails",
    "TransactionResponse",
    "TransactionStats",
    "VoucherDetails",
    # Market data
    "Coin",
]
