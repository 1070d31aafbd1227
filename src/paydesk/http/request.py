"""The incoming request as handlers see it."""

from dataclasses import dataclass, field
from typing import Any

from paydesk._internal.types import Receive, Scope
from paydesk.http.fields import Fields, parse_form


@dataclass(frozen=True, slots=True)
class Request:
    """One HTTP request.

    Method, path, headers, query and client address are read from the
    ASGI scope up front. The body is pulled from ``receive`` on first use
    and kept, so ``body()`` and ``form()`` may be awaited any number of
    times, by middleware and handler alike.
    """

    method: str
    path: str
    headers: Fields
    query: Fields
    client: tuple[str, int] | None
    _receive: Receive = field(repr=False, compare=False)
    _loaded: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_asgi(cls, scope: Scope, receive: Receive) -> "Request":
        client = scope.get("client")
        return cls(
            method=scope["method"].upper(),
            path=scope["path"],
            headers=Fields.from_headers(scope.get("headers", ())),
            query=Fields.from_query(scope.get("query_string", b"")),
            client=(client[0], client[1]) if client else None,
            _receive=receive,
        )

    async def body(self) -> bytes:
        if "body" not in self._loaded:
            received = bytearray()
            while True:
                message = await self._receive()
                received += message.get("body", b"")
                if not message.get("more_body", False):
                    break
            self._loaded["body"] = bytes(received)
        return self._loaded["body"]

    async def form(self) -> Fields:
        """The body as a URL-encoded form; ``ValueError`` if it is not one."""
        if "form" not in self._loaded:
            content_type = self.headers.get("content-type")
            self._loaded["form"] = parse_form(await self.body(), content_type)
        return self._loaded["form"]
