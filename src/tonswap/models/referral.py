"""Referral transaction model."""

import uuid
from decimal import Decimal

from sqlalchemy import ForeignKey, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tonswap.db.base import Base, CreatedAtMixin


class ReferralTransaction(Base, CreatedAtMixin):
    """Commission earned by a user for one referred swap.

    ``commission_rate`` is the rate the user had when the swap was recorded;
    changing the user's rate later leaves these rows untouched.
    """

    __tablename__ = "referral_transactions"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    referral_code: Mapped[str] = mapped_column(String(50))
    referred_wallet: Mapped[str] = mapped_column(String(128))
    amount: Mapped[Decimal] = mapped_column(Numeric(24, 9))
    commission: Mapped[Decimal] = mapped_column(Numeric(24, 9))
    commission_rate: Mapped[Decimal] = mapped_column(Numeric(5, 2))

    user: Mapped["User"] = relationship("User", back_populates="referral_transactions")
