"""Web routes.

The route table of the payment site, declared in one place. Order here
is match priority.
"""

from paydesk.app import App
from paydesk.config import AppConfig
from paydesk.middleware.access_log import RequestLogger
from paydesk.payments.controller import PaymentController, welcome
from paydesk.payments.gateway import PaymentGateway, SandboxGateway
from paydesk.payments.ledger import IdempotencyLedger
from paydesk.payments.service import ChargeService


def register_routes(app: App, payments: PaymentController) -> None:
    """Register the payment site's routes on *app*."""
    app.add_route("/", welcome, name="home")
    app.add_route("payment", payments.index, name="payment")
    app.add_route("charge", payments.charge, methods=["POST"], name="charge")
    app.add_route("success", payments.success, name="success")
    app.add_route("error", payments.error, name="error")


def create_app(
    config: AppConfig | None = None,
    *,
    gateway: PaymentGateway | None = None,
    ledger: IdempotencyLedger | None = None,
) -> App:
    """Build the payment site.

    Uses the sandbox gateway unless *gateway* is given.
    """
    app = App(config=config)
    service = ChargeService(gateway or SandboxGateway(), ledger)
    app.add_middleware(RequestLogger())
    register_routes(app, PaymentController(service, app.config))
    return app
