"""Idempotent charge submission."""

import logging

from paydesk.payments.errors import CardDeclined, GatewayUnavailable
from paydesk.payments.gateway import ChargeRequest, PaymentGateway
from paydesk.payments.ledger import ChargeOutcome, IdempotencyLedger

logger = logging.getLogger("paydesk.payments")


class ChargeService:
    """Submits charges to a gateway at most once per idempotency key.

    Approvals and declines are final: they are recorded in the ledger and
    replayed for any later submission with the same key, without calling
    the gateway again. ``GatewayUnavailable`` releases the key and
    propagates, so the client may retry.
    """

    __slots__ = ("gateway", "ledger")

    def __init__(self, gateway: PaymentGateway, ledger: IdempotencyLedger | None = None) -> None:
        self.gateway = gateway
        self.ledger = ledger if ledger is not None else IdempotencyLedger()

    async def submit(self, request: ChargeRequest) -> ChargeOutcome:
        """Charge once for ``request.idempotency_key``.

        Raises:
            IdempotencyConflict: the key was used for a different charge.
            ChargeInProgress: the key is being processed right now.
            GatewayUnavailable: the gateway could not be reached.
        """
        key = request.idempotency_key
        previous = self.ledger.begin(key, request.fingerprint)
        if previous is not None:
            logger.info("Replaying recorded outcome for idempotency key %s", key)
            return previous

        try:
            charge = await self.gateway.charge(request)
        except CardDeclined as exc:
            outcome = ChargeOutcome(key=key, decline_code=exc.code)
            logger.info("Charge declined (%s) for idempotency key %s", exc.code, key)
        except GatewayUnavailable:
            self.ledger.release(key)
            logger.warning("Gateway unavailable, released idempotency key %s", key)
            raise
        except BaseException:
            self.ledger.release(key)
            raise
        else:
            outcome = ChargeOutcome(key=key, charge=charge)
            logger.info(
                "Charge %s approved: %d %s (idempotency key %s)",
                charge.id,
                charge.amount,
                charge.currency,
                key,
            )

        self.ledger.complete(key, outcome)
        return outcome
