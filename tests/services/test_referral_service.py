"""Tests for the referral ledger."""

import re
from decimal import Decimal

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from tonswap.core.exceptions import ConflictError, NotFoundError, ValidationError
from tonswap.models.referral import ReferralTransaction
from tonswap.models.user import User
from tonswap.services.referral_service import (
    calculate_commission,
    generate_referral_code,
    generate_unique_referral_code,
    get_referral_transactions,
    record_referral,
    update_commission_rate,
    update_referral_code,
    validate_referral_code,
)

WALLET = "UQBvW8Z5huBkMJYdnfAEM5JqTNkuWX3diqYENkWsIL0XggGG"


@pytest.mark.unit
class TestCodes:
    def test_generated_code_format(self):
        code = generate_referral_code("alice")

        assert re.fullmatch(r"ALI-[A-Z0-9]{5}", code)

    def test_generated_code_pads_short_usernames(self):
        assert generate_referral_code("jo").startswith("JOX-")

    @pytest.mark.parametrize("code", ["ABC-12345", "abcde", "a-b-c", "12345"])
    def test_valid_codes(self, code: str):
        assert validate_referral_code(code) == code

    @pytest.mark.parametrize("code", ["ABCD", "AB_CDE", "ABC 123", "ABC!1234", ""])
    def test_invalid_codes(self, code: str):
        with pytest.raises(ValidationError):
            validate_referral_code(code)

    def test_commission(self):
        assert calculate_commission(Decimal("2"), Decimal("5")) == Decimal("0.10")


@pytest.mark.integration
class TestRecordReferral:
    async def test_known_code_accrues_commission(self, test_db: AsyncSession, referrer: User):
        entry = await record_referral(test_db, "ABC-12345", Decimal("2"), WALLET)
        await test_db.commit()

        assert entry is not None
        assert entry.commission == Decimal("0.10")
        assert entry.commission_rate == Decimal("5")
        assert entry.referred_wallet == WALLET
        assert entry.user_id == referrer.id

        await test_db.refresh(referrer)
        assert referrer.referrals == 1
        assert referrer.total_commission == Decimal("0.10")

    async def test_unknown_code_changes_nothing(self, test_db: AsyncSession, referrer: User):
        entry = await record_referral(test_db, "NOPE-00000", Decimal("2"), WALLET)
        await test_db.commit()

        assert entry is None
        await test_db.refresh(referrer)
        assert referrer.referrals == 0
        assert referrer.total_commission == Decimal("0")
        assert await test_db.scalar(select(func.count()).select_from(ReferralTransaction)) == 0

    async def test_repeated_calls_are_counted_every_time(
        self, test_db: AsyncSession, referrer: User
    ):
        await record_referral(test_db, "ABC-12345", Decimal("2"), WALLET)
        await record_referral(test_db, "ABC-12345", Decimal("2"), WALLET)
        await test_db.commit()

        await test_db.refresh(referrer)
        assert referrer.referrals == 2
        assert referrer.total_commission == Decimal("0.20")

    async def test_rate_change_does_not_touch_past_entries(
        self, test_db: AsyncSession, referrer: User
    ):
        await record_referral(test_db, "ABC-12345", Decimal("10"), WALLET)
        await update_commission_rate(test_db, referrer.id, Decimal("10"))
        await record_referral(test_db, "ABC-12345", Decimal("10"), WALLET)
        await test_db.commit()

        entries = await get_referral_transactions(test_db, referrer.id)
        assert sorted(entry.commission for entry in entries) == [Decimal("0.5"), Decimal("1")]
        assert sorted(entry.commission_rate for entry in entries) == [Decimal("5"), Decimal("10")]

        await test_db.refresh(referrer)
        assert referrer.total_commission == Decimal("1.5")


@pytest.mark.integration
class TestUserReferralSettings:
    @pytest.mark.parametrize("rate", [Decimal("-1"), Decimal("100.01")])
    async def test_commission_rate_out_of_range(
        self, test_db: AsyncSession, referrer: User, rate: Decimal
    ):
        with pytest.raises(ValidationError):
            await update_commission_rate(test_db, referrer.id, rate)

    async def test_commission_rate_unknown_user(self, test_db: AsyncSession):
        with pytest.raises(NotFoundError):
            await update_commission_rate(test_db, 999, Decimal("5"))

    async def test_change_referral_code(self, test_db: AsyncSession, test_user: User):
        user = await update_referral_code(test_db, test_user.id, "MY-CODE-1")

        assert user.referral_code == "MY-CODE-1"

    async def test_keeping_own_code_is_allowed(self, test_db: AsyncSession, referrer: User):
        user = await update_referral_code(test_db, referrer.id, "ABC-12345")

        assert user.referral_code == "ABC-12345"

    async def test_code_taken_by_another_user(
        self, test_db: AsyncSession, test_user: User, referrer: User
    ):
        with pytest.raises(ConflictError):
            await update_referral_code(test_db, test_user.id, "ABC-12345")

    async def test_short_code_rejected(self, test_db: AsyncSession, test_user: User):
        with pytest.raises(ValidationError):
            await update_referral_code(test_db, test_user.id, "AB1")

    async def test_unique_code_generation(self, test_db: AsyncSession, referrer: User):
        code = await generate_unique_referral_code(test_db, "abc")

        assert code.startswith("ABC-")
        assert code != referrer.referral_code
