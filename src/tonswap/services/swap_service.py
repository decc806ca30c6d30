"""Swap quoting and execution.

A swap sends TON to the receiving address and credits the wallet with the
target currency at the pair's rate, boosted by the wallet's active voucher.
Pricing uses ``receive = send_amount * send_rate / receive_rate`` where the
send rate is the pair rate and the receive rate is 1.

Execution order:

1. price the swap (rate and voucher)
2. relay the signed transfer and wait for confirmation
3. in one database transaction: count the voucher use, credit the referral,
   log the transaction and add the wallet's volume; a voucher used up by
   another swap in the meantime gives no bonus

Nothing is written when the transfer fails.
"""

import logging
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from tonswap.core.constants import RateConstants
from tonswap.core.exceptions import ValidationError
from tonswap.db.session import transactional
from tonswap.models.voucher import ActiveVoucher
from tonswap.schemas.swap import SwapQuote, SwapRequest, SwapResult
from tonswap.schemas.transaction import SwapDetails
from tonswap.schemas.voucher import ActiveVoucherResponse
from tonswap.services import (
    pricing,
    rate_service,
    referral_service,
    transaction_service,
    voucher_service,
    wallet_service,
)
from tonswap.services.transfer_gateway import TransferGateway, TransferRequest, submit_transfer

logger = logging.getLogger(__name__)

RECEIVE_RATE = Decimal("1")


def _validate_swap(from_currency: str, to_currency: str, amount: Decimal) -> None:
    if amount <= 0:
        raise ValidationError("Swap amount must be greater than zero")
    if from_currency != RateConstants.SEND_CURRENCY:
        raise ValidationError(f"Only {RateConstants.SEND_CURRENCY} can be sent in a swap")
    if from_currency == to_currency:
        raise ValidationError("Cannot swap a currency for itself")


def build_quote(
    pair: str,
    amount: Decimal,
    send_rate: Decimal,
    voucher: ActiveVoucher | None,
) -> SwapQuote:
    """Price a swap from an already resolved rate and voucher."""
    base_amount = pricing.base_receive_amount(amount, send_rate, RECEIVE_RATE)
    bonus_applied = pricing.voucher_applies(voucher)
    receive_amount = pricing.apply_voucher_bonus(base_amount, voucher)

    return SwapQuote(
        pair=pair,
        send_amount=amount,
        send_rate=send_rate,
        receive_rate=RECEIVE_RATE,
        base_amount=base_amount,
        receive_amount=receive_amount,
        formatted_receive_amount=pricing.format_amount(receive_amount),
        bonus_percent=voucher.bonus if voucher is not None and bonus_applied else None,
        bonus_applied=bonus_applied,
        voucher_id=voucher.id if voucher is not None and bonus_applied else None,
    )


async def quote_swap(
    db: AsyncSession,
    from_currency: str,
    to_currency: str,
    amount: Decimal,
    wallet_address: str | None = None,
) -> SwapQuote:
    """Quote a swap without executing it.

    Args:
        db: Async database session
        from_currency: Currency sent, e.g. "TON"
        to_currency: Currency received, e.g. "USDT"
        amount: Amount sent
        wallet_address: Wallet whose active voucher should be applied

    Returns:
        The priced swap

    Raises:
        ValidationError: If the amount is not positive, the sent currency is
            not TON or both currencies are the same

    Example:
        >>> quote = await quote_swap(db, "TON", "USDT", Decimal("10"))
        >>> quote.formatted_receive_amount
        '35.00'
    """
    _validate_swap(from_currency, to_currency, amount)

    pair = rate_service.make_pair(from_currency, to_currency)
    send_rate = await rate_service.get_exchange_rate(db, pair)

    voucher = None
    if wallet_address:
        voucher = await voucher_service.get_active_voucher(db, wallet_address)

    return build_quote(pair, amount, send_rate, voucher)


async def execute_swap(
    db: AsyncSession,
    gateway: TransferGateway,
    request: SwapRequest,
) -> SwapResult:
    """Execute a swap paid by a wallet-signed transfer.

    Args:
        db: Async database session
        gateway: Transfer gateway relaying the signed payment
        request: Swap parameters, signed payment and optional referral code

    Returns:
        The recorded swap with its final quote, the voucher state after this
        swap and whether a referral was credited

    Raises:
        ValidationError: If the swap parameters are invalid
        ExternalAPIError: If the transfer is rejected or expires; nothing is
            written in that case
    """
    wallet_address = request.wallet_address.strip()
    _validate_swap(request.from_currency, request.to_currency, request.amount)

    pair = rate_service.make_pair(request.from_currency, request.to_currency)
    send_rate = await rate_service.get_exchange_rate(db, pair)
    voucher = await voucher_service.get_active_voucher(db, wallet_address)
    quote = build_quote(pair, request.amount, send_rate, voucher)

    transfer = TransferRequest.build(
        source=wallet_address,
        amount=request.amount,
        signed_message=request.signed_transfer,
    )
    receipt = await submit_transfer(gateway, transfer)

    referral_code = (request.referral_code or "").strip() or None

    async with transactional(db):
        used_voucher = None
        if quote.bonus_applied and voucher is not None:
            used_voucher = await voucher_service.consume_voucher(db, voucher)
            if used_voucher is None:
                # used up while the transfer was pending
                quote = build_quote(pair, request.amount, send_rate, None)

        referral = None
        if referral_code:
            referral = await referral_service.record_referral(
                db, referral_code, request.amount, wallet_address
            )

        transaction = await transaction_service.record_transaction(
            db,
            wallet_address,
            request.amount,
            SwapDetails(
                from_currency=request.from_currency,
                to_currency=request.to_currency,
                send_amount=request.amount,
                receive_amount=quote.receive_amount,
                send_rate=quote.send_rate,
                receive_rate=quote.receive_rate,
                voucher_id=quote.voucher_id,
                bonus_applied=quote.bonus_applied,
                referral_code=referral_code,
                transfer_reference=receipt.reference or None,
            ),
        )
        await wallet_service.add_swap_volume(db, wallet_address, request.amount)

    logger.info(
        f"Swap {transaction.id}: {request.amount} {request.from_currency} -> "
        f"{quote.formatted_receive_amount} {request.to_currency} for {wallet_address}"
    )

    return SwapResult(
        transaction_id=transaction.id,
        quote=quote,
        voucher=ActiveVoucherResponse.model_validate(used_voucher) if used_voucher else None,
        referral_recorded=referral is not None,
    )
