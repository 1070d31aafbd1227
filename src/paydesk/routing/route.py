"""RouteRule and dispatch result frozen dataclasses."""

from dataclasses import dataclass
from enum import Enum

from paydesk._internal.types import Handler
from paydesk.errors import HTTPError, MethodNotAllowed, NotFound


@dataclass(frozen=True, slots=True)
class RouteRule:
    """A ``(method, path, handler)`` binding.

    Created during app setup, frozen into a ``RouteTable`` at compile time.
    ``path`` is always normalized (leading slash, no trailing slash).
    """

    method: str
    path: str
    handler: Handler
    name: str | None = None


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful dispatch."""

    rule: RouteRule

    @property
    def handler(self) -> Handler:
        return self.rule.handler

    @property
    def path(self) -> str:
        return self.rule.path


class MissReason(Enum):
    """Why a dispatch produced no handler."""

    NOT_FOUND = 404
    METHOD_NOT_ALLOWED = 405


@dataclass(frozen=True, slots=True)
class RouteMiss:
    """Result of a failed dispatch.

    ``allowed`` lists the methods registered for the path, in
    registration order; it is empty for ``NOT_FOUND``.
    """

    reason: MissReason
    method: str
    path: str
    allowed: tuple[str, ...] = ()

    @property
    def status(self) -> int:
        return self.reason.value

    def to_error(self) -> HTTPError:
        """Convert the miss into the HTTP error the serving layer renders."""
        if self.reason is MissReason.METHOD_NOT_ALLOWED:
            return MethodNotAllowed(self.allowed)
        return NotFound(f"No route matches {self.method} {self.path!r}")


type DispatchResult = RouteMatch | RouteMiss
