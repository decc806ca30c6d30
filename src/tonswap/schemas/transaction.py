"""Transaction schemas.

Transaction details are a tagged union keyed by ``kind``: every transaction
kind has its own fixed set of fields instead of a free-form map.
"""

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Annotated, Literal

from pydantic import BaseModel, Field, TypeAdapter

from tonswap.models.transaction import TransactionKind


class SwapDetails(BaseModel):
    """Details of a completed swap."""

    kind: Literal["swap"] = "swap"
    from_currency: str
    to_currency: str
    send_amount: Decimal
    receive_amount: Decimal
    send_rate: Decimal
    receive_rate: Decimal
    voucher_id: uuid.UUID | None = None
    bonus_applied: bool = False
    referral_code: str | None = None
    transfer_reference: str | None = None


class VoucherDetails(BaseModel):
    """Details of a voucher purchase."""

    kind: Literal["voucher"] = "voucher"
    voucher_rate_id: int
    voucher_name: str
    bonus: Decimal
    transfer_reference: str | None = None


TransactionDetails = Annotated[SwapDetails | VoucherDetails, Field(discriminator="kind")]

transaction_details_adapter: TypeAdapter[SwapDetails | VoucherDetails] = TypeAdapter(
    TransactionDetails
)


class TransactionResponse(BaseModel):
    """Recorded transaction."""

    id: uuid.UUID
    wallet_address: str
    amount: Decimal
    kind: TransactionKind
    details: TransactionDetails
    created_at: datetime

    model_config = {"from_attributes": True}


class TransactionStats(BaseModel):
    """Aggregates for the administrator dashboard."""

    transaction_count: int
    swap_count: int
    voucher_count: int
    total_volume: Decimal
    swap_volume: Decimal
    voucher_volume: Decimal
    wallet_count: int
