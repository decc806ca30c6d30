"""Wallet model for connected TON wallets."""

import re
from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from tonswap.db.base import Base, CreatedAtMixin, utcnow

_NON_ALPHANUMERIC = re.compile(r"[^a-zA-Z0-9]")


def sanitize_address(address: str) -> str:
    """Strip everything but letters and digits to build the wallet key."""
    return _NON_ALPHANUMERIC.sub("", address)


class Wallet(Base, CreatedAtMixin):
    """A wallet that has connected at least once.

    Attributes:
        id: Sanitized address (letters and digits only), the storage key
        address: Address as reported by the wallet
        last_active: Last time the wallet connected or swapped
        total_swapped: Cumulative TON sent through swaps
    """

    __tablename__ = "wallets"

    id: Mapped[str] = mapped_column(String(128), primary_key=True)
    address: Mapped[str] = mapped_column(String(128), unique=True, index=True)
    last_active: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    total_swapped: Mapped[Decimal] = mapped_column(Numeric(24, 9), default=Decimal("0"))
