"""Voucher models: the purchasable rate cards and the vouchers wallets hold."""

import enum
import uuid
from decimal import Decimal

from sqlalchemy import Enum, ForeignKey, Index, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tonswap.core.constants import VoucherConstants
from tonswap.db.base import Base, TimestampMixin


class VoucherStatus(str, enum.Enum):
    """Lifecycle of a purchased voucher."""

    ACTIVE = "active"
    EXHAUSTED = "exhausted"
    REPLACED = "replaced"  # superseded by a newer purchase for the same wallet


class VoucherRate(Base, TimestampMixin):
    """Voucher rate card: what a voucher costs and the bonus it grants.

    Attributes:
        name: Display name (e.g., "Standard Bonus")
        bonus: Bonus percentage added to the receive amount of a swap
        price: Price in TON
        transaction_limit: Number of swaps a purchased voucher boosts
    """

    __tablename__ = "voucher_rates"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(100), unique=True)
    bonus: Mapped[Decimal] = mapped_column(Numeric(5, 2))
    price: Mapped[Decimal] = mapped_column(Numeric(18, 9))
    transaction_limit: Mapped[int] = mapped_column(
        Integer, default=VoucherConstants.DEFAULT_TRANSACTION_LIMIT
    )


class ActiveVoucher(Base, TimestampMixin):
    """A voucher bought by a wallet.

    The bonus is copied from the rate card at purchase time, so later edits of
    the card do not change vouchers that were already paid for. Rows are never
    deleted: exhausted and replaced vouchers stay as history and are simply
    ignored by the bonus calculation.
    """

    __tablename__ = "active_vouchers"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    wallet_address: Mapped[str] = mapped_column(String(128), index=True)
    voucher_rate_id: Mapped[int] = mapped_column(
        ForeignKey("voucher_rates.id", ondelete="RESTRICT")
    )
    name: Mapped[str] = mapped_column(String(100))
    bonus: Mapped[Decimal] = mapped_column(Numeric(5, 2))
    price: Mapped[Decimal] = mapped_column(Numeric(18, 9))
    used_transactions: Mapped[int] = mapped_column(Integer, default=0)
    transaction_limit: Mapped[int] = mapped_column(
        Integer, default=VoucherConstants.DEFAULT_TRANSACTION_LIMIT
    )
    status: Mapped[VoucherStatus] = mapped_column(
        Enum(VoucherStatus, values_callable=lambda e: [m.value for m in e]),
        default=VoucherStatus.ACTIVE,
    )

    voucher_rate: Mapped["VoucherRate"] = relationship("VoucherRate")

    __table_args__ = (Index("ix_active_vouchers_wallet_status", "wallet_address", "status"),)

    @property
    def is_usable(self) -> bool:
        """Active and below its transaction limit, i.e. still grants its bonus."""
        return (
            self.status == VoucherStatus.ACTIVE
            and self.used_transactions < self.transaction_limit
        )

    @property
    def remaining_transactions(self) -> int:
        return max(self.transaction_limit - self.used_transactions, 0)

    @property
    def status_text(self) -> str:
        """Short status shown next to the voucher, e.g. "1/3 used" or "Expired"."""
        if not self.is_usable:
            return "Expired"
        return f"{self.used_transactions}/{self.transaction_limit} used"
