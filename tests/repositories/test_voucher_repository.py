"""Tests for the voucher repositories."""

import pytest

from tonswap.models.voucher import ActiveVoucher, VoucherRate, VoucherStatus
from tonswap.repositories.voucher import ActiveVoucherRepository, VoucherRateRepository

pytestmark = pytest.mark.integration


async def test_rate_cards_in_id_order(seeded_db):
    repo = VoucherRateRepository(VoucherRate, seeded_db)

    cards = await repo.get_all()

    assert [card.name for card in cards] == ["Standard Bonus", "Premium Bonus"]
    assert (await repo.get_by_name("Premium Bonus")).id == cards[1].id
    assert await repo.get_by_name("Gold Bonus") is None


async def test_get_active_for_wallet(seeded_db, standard_voucher, wallet_address):
    repo = ActiveVoucherRepository(ActiveVoucher, seeded_db)

    voucher = await repo.get_active_for_wallet(wallet_address)

    assert voucher is not None
    assert voucher.id == standard_voucher.id
    assert await repo.get_active_for_wallet("UQsomeoneelse") is None


async def test_replace_active(seeded_db, standard_voucher, wallet_address):
    repo = ActiveVoucherRepository(ActiveVoucher, seeded_db)

    assert await repo.replace_active(wallet_address) == 1
    assert await repo.replace_active(wallet_address) == 0
    await seeded_db.commit()

    await seeded_db.refresh(standard_voucher)
    assert standard_voucher.status == VoucherStatus.REPLACED
    assert await repo.get_active_for_wallet(wallet_address) is None
    assert len(await repo.get_by_wallet(wallet_address)) == 1


async def test_increment_usage_stops_at_limit(seeded_db, standard_voucher):
    repo = ActiveVoucherRepository(ActiveVoucher, seeded_db)

    assert await repo.increment_usage(standard_voucher.id) is True
    assert await repo.increment_usage(standard_voucher.id) is True
    assert await repo.increment_usage(standard_voucher.id) is True
    assert await repo.increment_usage(standard_voucher.id) is False
    await seeded_db.commit()

    await seeded_db.refresh(standard_voucher)
    assert standard_voucher.used_transactions == 3
    assert standard_voucher.status == VoucherStatus.EXHAUSTED


async def test_increment_usage_ignores_replaced_voucher(seeded_db, standard_voucher, wallet_address):
    repo = ActiveVoucherRepository(ActiveVoucher, seeded_db)
    await repo.replace_active(wallet_address)

    assert await repo.increment_usage(standard_voucher.id) is False
