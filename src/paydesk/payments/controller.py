"""Payment controller: the actions behind the payment routes.

Every charge submission ends in a redirect: to the success page with the
charge id, or to the error page with a reason code. The error page only
ever shows one of the fixed messages below, never request text.
"""

import logging
import uuid

from paydesk.config import AppConfig
from paydesk.http.fields import Fields
from paydesk.http.request import Request
from paydesk.http.response import Redirect
from paydesk.payments.errors import InvalidChargeRequest, PaymentError
from paydesk.payments.gateway import ChargeRequest
from paydesk.payments.service import ChargeService
from paydesk.templating.filters import qs
from paydesk.templating.returns import Template

logger = logging.getLogger("paydesk.payments")

MAX_KEY_LENGTH = 255

REASON_MESSAGES: dict[str, str] = {
    "card_declined": "Your card was declined.",
    "insufficient_funds": "Your card has insufficient funds.",
    "expired_card": "Your card has expired.",
    "invalid_token": "The card details could not be verified.",
    "invalid_request": "The payment form was incomplete. Please try again.",
    "idempotency_conflict": "This payment form was already used for a different payment.",
    "in_progress": "This payment is already being processed.",
    "gateway_unavailable": "The payment provider is unavailable. Please try again shortly.",
}
GENERIC_MESSAGE = "Something went wrong with your payment."


def welcome() -> Template:
    """Landing page."""
    return Template("welcome.html")


class PaymentController:
    """Show the payment form, submit charges, report the result."""

    __slots__ = ("config", "error_path", "service", "success_path")

    def __init__(
        self,
        service: ChargeService,
        config: AppConfig,
        *,
        success_path: str = "/success",
        error_path: str = "/error",
    ) -> None:
        self.service = service
        self.config = config
        self.success_path = success_path
        self.error_path = error_path

    def index(self) -> Template:
        """Render the payment form with a fresh idempotency key."""
        return Template(
            "payment.html",
            amount=self.config.charge_amount,
            currency=self.config.currency,
            description=self.config.charge_description,
            idempotency_key=uuid.uuid4().hex,
        )

    async def charge(self, request: Request) -> Redirect:
        """Submit the charge and redirect to the success or error page."""
        try:
            form = await request.form()
        except ValueError as exc:
            logger.info("Unreadable payment form: %s", exc)
            return self._fail(InvalidChargeRequest.code)

        try:
            charge_request = self._charge_request(form, request)
            outcome = await self.service.submit(charge_request)
        except PaymentError as exc:
            logger.info("Charge not completed: %s", exc)
            return self._fail(exc.code)

        if outcome.charge is not None:
            return Redirect(qs(self.success_path, charge=outcome.charge.id))
        return self._fail(outcome.decline_code or "card_declined")

    def success(self, request: Request) -> Template:
        """Show the charge named by ``?charge=``, or a generic confirmation."""
        charge_id = request.query.get("charge")
        charge = self.service.ledger.find_charge(charge_id) if charge_id else None
        return Template("success.html", charge=charge)

    def error(self, request: Request) -> Template:
        """Show the message for ``?reason=``."""
        reason = request.query.get("reason", "")
        if reason not in REASON_MESSAGES:
            return Template("error.html", reason="unknown", message=GENERIC_MESSAGE)
        return Template("error.html", reason=reason, message=REASON_MESSAGES[reason])

    # -- Internal --

    def _fail(self, reason: str) -> Redirect:
        return Redirect(qs(self.error_path, reason=reason))

    def _charge_request(self, form: Fields, request: Request) -> ChargeRequest:
        token = (form.get("payment_token") or "").strip()
        if not token:
            raise InvalidChargeRequest("Missing payment token")

        key = (form.get("idempotency_key") or request.headers.get("idempotency-key") or "").strip()
        if not key or len(key) > MAX_KEY_LENGTH or not key.isprintable():
            raise InvalidChargeRequest("Missing or malformed idempotency key")

        amount = self.config.charge_amount
        submitted = form.get("amount")
        if submitted is not None and submitted.strip() != str(amount):
            raise InvalidChargeRequest(f"Submitted amount {submitted!r} does not match {amount}")

        return ChargeRequest(
            token=token,
            amount=amount,
            currency=self.config.currency,
            idempotency_key=key,
            description=self.config.charge_description,
            email=(form.get("email") or "").strip(),
        )
