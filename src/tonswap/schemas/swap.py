"""Swap schemas."""

import uuid
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from tonswap.schemas.voucher import ActiveVoucherResponse


class SwapQuoteRequest(BaseModel):
    """Ask for the receive amount of a prospective swap."""

    from_currency: str = Field("TON", min_length=2, max_length=10)
    to_currency: str = Field("USDT", min_length=2, max_length=10)
    amount: Decimal
    wallet_address: str | None = Field(
        None, max_length=128, description="Apply this wallet's active voucher"
    )

    @field_validator("from_currency", "to_currency")
    @classmethod
    def upper_currency(cls, value: str) -> str:
        return value.strip().upper()


class SwapRequest(SwapQuoteRequest):
    """Swap paid with a wallet-signed transfer."""

    wallet_address: str = Field(..., min_length=1, max_length=128)
    signed_transfer: str = Field(..., min_length=1, description="Wallet-signed transfer message")
    referral_code: str | None = Field(None, max_length=50)


class SwapQuote(BaseModel):
    """Priced swap."""

    pair: str
    send_amount: Decimal
    send_rate: Decimal
    receive_rate: Decimal
    base_amount: Decimal
    receive_amount: Decimal
    formatted_receive_amount: str
    bonus_percent: Decimal | None = None
    bonus_applied: bool = False
    voucher_id: uuid.UUID | None = None


class SwapResult(BaseModel):
    """Outcome of a confirmed swap."""

    transaction_id: uuid.UUID
    quote: SwapQuote
    voucher: ActiveVoucherResponse | None = None
    referral_recorded: bool = False
