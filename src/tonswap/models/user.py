"""User model."""

from decimal import Decimal

from sqlalchemy import Boolean, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tonswap.core.config import settings
from tonswap.db.base import Base, TimestampMixin


class User(Base, TimestampMixin):
    """Registered user who can refer wallets and earn commission.

    ``referrals`` and ``total_commission`` are running totals maintained by
    the referral ledger; ``commission_rate`` is a percentage applied to every
    referred swap at the moment it is recorded. Administrators are users with
    ``is_superuser`` set.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    username: Mapped[str] = mapped_column(String(50), unique=True, index=True)
    hashed_password: Mapped[str] = mapped_column(String(255))
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    is_superuser: Mapped[bool] = mapped_column(Boolean, default=False)

    referral_code: Mapped[str] = mapped_column(String(50), unique=True, index=True)
    referrals: Mapped[int] = mapped_column(Integer, default=0)
    total_commission: Mapped[Decimal] = mapped_column(Numeric(24, 9), default=Decimal("0"))
    commission_rate: Mapped[Decimal] = mapped_column(
        Numeric(5, 2), default=lambda: Decimal(str(settings.DEFAULT_COMMISSION_RATE))
    )

    referral_transactions: Mapped[list["ReferralTransaction"]] = relationship(
        "ReferralTransaction", back_populates="user"
    )
