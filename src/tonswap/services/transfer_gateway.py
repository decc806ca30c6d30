"""Outbound TON transfers.

Every swap and voucher purchase is paid by a transfer from the user's wallet
to the fixed receiving address. The wallet signs the transfer on the client;
the server relays the signed message and waits for the network to accept it.
Downstream effects (transaction log, voucher usage, referral commission) are
only applied once a transfer is confirmed.
"""

import asyncio
import logging
import math
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import UTC, datetime
from decimal import ROUND_FLOOR, Decimal
from typing import Any

import httpx

from tonswap.core.config import settings
from tonswap.core.constants import AmountConstants
from tonswap.core.exceptions import ExternalAPIError, ValidationError

logger = logging.getLogger(__name__)


def to_nanotons(amount: Decimal) -> int:
    """Convert TON to nanotons, rounding down.

    Example:
        >>> to_nanotons(Decimal("0.1"))
        100000000
    """
    nano = (Decimal(amount) * AmountConstants.NANO_PER_TON).to_integral_value(rounding=ROUND_FLOOR)
    return int(nano)


@dataclass(frozen=True)
class TransferRequest:
    """A signed transfer to relay.

    Attributes:
        source: Paying wallet address
        destination: Receiving address
        amount_nano: Amount in nanotons
        valid_until: Unix time after which the transfer is abandoned
        signed_message: Wallet-signed external message (base64 BoC)
    """

    source: str
    destination: str
    amount_nano: int
    valid_until: int
    signed_message: str

    @classmethod
    def build(
        cls,
        *,
        source: str,
        amount: Decimal,
        signed_message: str,
        destination: str | None = None,
        now: float | None = None,
    ) -> "TransferRequest":
        """Build a request to the receiving address, valid for the configured window.

        Raises:
            ValidationError: If the amount is below one nanoton
        """
        amount_nano = to_nanotons(amount)
        if amount_nano <= 0:
            raise ValidationError("Transfer amount must be positive")

        issued_at = time.time() if now is None else now
        return cls(
            source=source,
            destination=destination or settings.RECEIVER_ADDRESS,
            amount_nano=amount_nano,
            valid_until=math.floor(issued_at) + settings.TRANSFER_VALIDITY_SECONDS,
            signed_message=signed_message,
        )

    @property
    def amount(self) -> Decimal:
        return Decimal(self.amount_nano) / AmountConstants.NANO_PER_TON


@dataclass(frozen=True)
class TransferReceipt:
    """Confirmation of an accepted transfer."""

    reference: str
    confirmed_at: datetime = field(default_factory=lambda: datetime.now(UTC))


class TransferGateway(ABC):
    """Relays signed transfers to the TON network."""

    @abstractmethod
    async def submit(self, request: TransferRequest) -> TransferReceipt:
        """Submit a transfer and wait for it to be accepted.

        Raises:
            ExternalAPIError: If the transfer is rejected or the network
                cannot be reached
        """


class TonCenterGateway(TransferGateway):
    """Gateway relaying signed messages through the TON Center HTTP API."""

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        *,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = (base_url or settings.TONCENTER_API_URL).rstrip("/")
        self.api_key = api_key if api_key is not None else settings.TONCENTER_API_KEY
        self.timeout = timeout
        self._transport = transport

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["X-API-Key"] = self.api_key
        return headers

    async def submit(self, request: TransferRequest) -> TransferReceipt:
        url = f"{self.base_url}/sendBocReturnHash"

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as client:
                response = await client.post(
                    url, json={"boc": request.signed_message}, headers=self._headers()
                )
        except httpx.HTTPError as e:
            logger.error(f"TON Center unreachable: {e}")
            raise ExternalAPIError("Transfer service is unreachable") from e

        try:
            payload: dict[str, Any] = response.json()
        except ValueError:
            payload = {}

        if response.status_code != 200 or not payload.get("ok"):
            reason = payload.get("error") or f"HTTP {response.status_code}"
            logger.warning(f"Transfer from {request.source} rejected: {reason}")
            raise ExternalAPIError(f"Transfer rejected: {reason}")

        result = payload.get("result") or {}
        reference = result.get("hash") if isinstance(result, dict) else None
        return TransferReceipt(reference=reference or "")


async def submit_transfer(gateway: TransferGateway, request: TransferRequest) -> TransferReceipt:
    """Submit a transfer, abandoning it when its validity window runs out.

    Raises:
        ExternalAPIError: If the request already expired, the gateway did not
            answer before ``valid_until``, or the gateway failed
    """
    remaining = request.valid_until - time.time()
    if remaining <= 0:
        raise ExternalAPIError("Transfer request expired")

    logger.info(
        f"Submitting transfer of {request.amount} TON from {request.source} "
        f"to {request.destination}"
    )
    try:
        receipt = await asyncio.wait_for(gateway.submit(request), timeout=remaining)
    except TimeoutError as e:
        logger.warning(f"Transfer from {request.source} abandoned after validity window")
        raise ExternalAPIError("Transfer was not confirmed before it expired") from e

    logger.info(f"Transfer confirmed: {receipt.reference or 'no reference'}")
    return receipt
