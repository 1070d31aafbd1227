"""Request middleware: protocol and built-in access logging."""

from paydesk.middleware.access_log import RequestLogger
from paydesk.middleware.protocol import Middleware, Next

__all__ = ["Middleware", "Next", "RequestLogger"]
