"""Payments: gateway protocol, idempotency ledger, charge service, controller."""

from paydesk.payments.controller import PaymentController, welcome
from paydesk.payments.errors import (
    CardDeclined,
    ChargeInProgress,
    GatewayError,
    GatewayUnavailable,
    IdempotencyConflict,
    InvalidChargeRequest,
    PaymentError,
)
from paydesk.payments.gateway import Charge, ChargeRequest, PaymentGateway, SandboxGateway
from paydesk.payments.ledger import ChargeOutcome, IdempotencyLedger
from paydesk.payments.service import ChargeService

__all__ = [
    "CardDeclined",
    "Charge",
    "ChargeInProgress",
    "ChargeOutcome",
    "ChargeRequest",
    "ChargeService",
    "GatewayError",
    "GatewayUnavailable",
    "IdempotencyConflict",
    "IdempotencyLedger",
    "InvalidChargeRequest",
    "PaymentController",
    "PaymentError",
    "PaymentGateway",
    "SandboxGateway",
    "welcome",
]
