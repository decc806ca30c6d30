"""Wallet schemas."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field


class WalletConnect(BaseModel):
    """Wallet announcing itself after a wallet-connect session opens."""

    address: str = Field(..., min_length=1, max_length=128)


class WalletResponse(BaseModel):
    """Wallet directory entry."""

    address: str
    last_active: datetime
    total_swapped: Decimal
    created_at: datetime

    model_config = {"from_attributes": True}
