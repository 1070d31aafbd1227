"""Payment error hierarchy.

Raised by gateways, the idempotency ledger, and the charge service.
The controller turns every one of them into a redirect to the error
page; none of them escape as an HTTP 500.
"""

from paydesk.errors import PaydeskError


class PaymentError(PaydeskError):
    """Base for all payment errors.

    ``code`` is a short, stable identifier safe to put in a URL.
    """

    code: str = "payment_error"

    def __init__(self, message: str = "", *, code: str | None = None) -> None:
        if code is not None:
            self.code = code
        super().__init__(message or self.code)


class GatewayError(PaymentError):
    """The payment gateway rejected or could not process a charge."""

    code = "gateway_error"


class CardDeclined(GatewayError):  # noqa: N818
    """The card was declined. ``code`` carries the decline reason."""

    code = "card_declined"


class GatewayUnavailable(GatewayError):  # noqa: N818
    """The gateway could not be reached. Safe to retry with the same key."""

    code = "gateway_unavailable"


class InvalidChargeRequest(PaymentError):  # noqa: N818
    """The submitted payment form is incomplete or malformed."""

    code = "invalid_request"


class IdempotencyConflict(PaymentError):  # noqa: N818
    """An idempotency key was reused for a different charge."""

    code = "idempotency_conflict"


class ChargeInProgress(PaymentError):  # noqa: N818
    """A charge with the same idempotency key is still being processed."""

    code = "in_progress"
