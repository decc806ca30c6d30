"""Exchange rate schemas for request/response validation."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel


class ExchangeRateUpdate(BaseModel):
    """New rate for a pair.

    Positivity is checked by the rate service, which rejects the update and
    keeps the stored rate.
    """

    rate: Decimal


class ExchangeRateResponse(BaseModel):
    """Stored exchange rate."""

    pair: str
    rate: Decimal
    updated_at: datetime

    model_config = {"from_attributes": True}


class ResolvedRateResponse(BaseModel):
    """Rate used for pricing, possibly the built-in default."""

    pair: str
    rate: Decimal
    is_default: bool
