"""Voucher schemas."""

import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from tonswap.models.voucher import VoucherStatus


class VoucherRateResponse(BaseModel):
    """Voucher rate card."""

    id: int
    name: str
    bonus: Decimal
    price: Decimal
    transaction_limit: int
    updated_at: datetime

    model_config = {"from_attributes": True}


class VoucherRateUpdate(BaseModel):
    """New bonus percentage for a rate card."""

    bonus: Decimal


class VoucherPurchaseRequest(BaseModel):
    """Payment for a voucher, signed by the buyer's wallet."""

    wallet_address: str = Field(..., min_length=1, max_length=128)
    voucher_rate_id: int
    signed_transfer: str = Field(..., min_length=1, description="Wallet-signed transfer message")


class ActiveVoucherResponse(BaseModel):
    """Voucher held by a wallet."""

    id: uuid.UUID
    wallet_address: str
    voucher_rate_id: int
    name: str
    bonus: Decimal
    used_transactions: int
    transaction_limit: int
    remaining_transactions: int
    status: VoucherStatus
    status_text: str
    created_at: datetime

    model_config = {"from_attributes": True}
