"""Transaction model: append-only log of confirmed payments."""

import enum
import uuid
from decimal import Decimal
from typing import Any

from sqlalchemy import JSON, Enum, Index, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from tonswap.db.base import Base, CreatedAtMixin


class TransactionKind(str, enum.Enum):
    """What the payment was for."""

    SWAP = "swap"
    VOUCHER = "voucher"


class Transaction(Base, CreatedAtMixin):
    """A confirmed transfer from a wallet to the receiving address.

    Rows are written once and never updated or deleted. ``details`` holds the
    kind-specific payload (see ``tonswap.schemas.transaction``), validated
    before it is stored.
    """

    __tablename__ = "transactions"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    wallet_address: Mapped[str] = mapped_column(String(128), index=True)
    amount: Mapped[Decimal] = mapped_column(Numeric(24, 9))
    kind: Mapped[TransactionKind] = mapped_column(
        Enum(TransactionKind, values_callable=lambda e: [m.value for m in e]), index=True
    )
    details: Mapped[dict[str, Any]] = mapped_column(JSON)

    __table_args__ = (Index("ix_transactions_created_at", "created_at"),)
