"""Payment gateway protocol and the in-process sandbox gateway.

Paydesk never speaks a gateway's wire protocol itself: anything that
implements ``PaymentGateway`` can be plugged into ``ChargeService``.
``SandboxGateway`` is a deterministic stand-in used in development and
tests, keyed by well-known test card tokens.
"""

import threading
import time
import uuid
from dataclasses import dataclass
from typing import Protocol

from paydesk.payments.errors import CardDeclined, GatewayUnavailable


@dataclass(frozen=True, slots=True)
class ChargeRequest:
    """A request to charge a tokenized card.

    ``amount`` is in minor units (cents for USD).
    """

    token: str
    amount: int
    currency: str
    idempotency_key: str
    description: str = ""
    email: str = ""

    @property
    def fingerprint(self) -> tuple[str, int, str]:
        """What must not change between retries of the same key."""
        return (self.token, self.amount, self.currency)


@dataclass(frozen=True, slots=True)
class Charge:
    """A successful charge as reported by the gateway."""

    id: str
    amount: int
    currency: str
    description: str = ""
    email: str = ""
    created_at: float = 0.0


class PaymentGateway(Protocol):
    """Anything that can charge a card.

    Implementations raise ``CardDeclined`` for declines and
    ``GatewayUnavailable`` when the outcome is unknown and the charge
    may be retried with the same idempotency key.
    """

    async def charge(self, request: ChargeRequest) -> Charge: ...


# token -> decline code; tokens not listed here and not in _APPROVED are invalid
_DECLINED: dict[str, str] = {
    "tok_chargeDeclined": "card_declined",
    "tok_insufficientFunds": "insufficient_funds",
    "tok_expiredCard": "expired_card",
}
_APPROVED = frozenset({"tok_visa", "tok_mastercard", "tok_amex"})
_UNAVAILABLE = "tok_unavailable"


class SandboxGateway:
    """Deterministic in-process gateway.

    ``tok_visa``, ``tok_mastercard`` and ``tok_amex`` are approved;
    ``tok_chargeDeclined``, ``tok_insufficientFunds`` and
    ``tok_expiredCard`` are declined with matching codes;
    ``tok_unavailable`` simulates an outage; any other token is declined
    as ``invalid_token``.

    ``calls`` counts every charge attempt that reached the gateway.
    """

    __slots__ = ("_calls", "_lock")

    def __init__(self) -> None:
        self._calls = 0
        self._lock = threading.Lock()

    @property
    def calls(self) -> int:
        return self._calls

    async def charge(self, request: ChargeRequest) -> Charge:
        with self._lock:
            self._calls += 1

        if request.token == _UNAVAILABLE:
            raise GatewayUnavailable("Sandbox gateway is unavailable")
        if request.token in _DECLINED:
            code = _DECLINED[request.token]
            raise CardDeclined(f"Card declined: {code}", code=code)
        if request.token not in _APPROVED:
            raise CardDeclined("Unknown card token", code="invalid_token")

        return Charge(
            id=f"ch_{uuid.uuid4().hex[:24]}",
            amount=request.amount,
            currency=request.currency,
            description=request.description,
            email=request.email,
            created_at=time.time(),
        )
