"""User and referral schemas."""

import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, EmailStr, Field

from tonswap.core.constants import ReferralConstants

PASSWORD_MIN_LENGTH = 6


class UserBase(BaseModel):
    """Base user schema."""

    email: EmailStr
    username: str = Field(..., min_length=3, max_length=50)


class UserResponse(UserBase):
    """Schema for user response."""

    id: int
    referral_code: str
    referrals: int
    total_commission: Decimal
    commission_rate: Decimal
    is_active: bool
    is_superuser: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class CommissionRateUpdate(BaseModel):
    """New commission rate in percent."""

    commission_rate: Decimal = Field(
        ...,
        ge=ReferralConstants.MIN_COMMISSION_RATE,
        le=ReferralConstants.MAX_COMMISSION_RATE,
    )


class ReferralCodeUpdate(BaseModel):
    """New referral code.

    Format rules are enforced by the referral service so the caller gets a
    single, readable validation message.
    """

    referral_code: str = Field(..., max_length=ReferralConstants.MAX_CODE_LENGTH)


class PasswordUpdate(BaseModel):
    """Password set by an administrator."""

    password: str = Field(..., min_length=PASSWORD_MIN_LENGTH)


class ReferralTransactionResponse(BaseModel):
    """Commission earned for one referred swap."""

    id: uuid.UUID
    user_id: int
    referral_code: str
    referred_wallet: str
    amount: Decimal
    commission: Decimal
    commission_rate: Decimal
    created_at: datetime

    model_config = {"from_attributes": True}
