"""The shape every middleware has.

Functions and callable objects both qualify; ``RequestLogger`` is an
example of the latter.
"""

from collections.abc import Awaitable, Callable
from typing import Protocol

from paydesk.http.request import Request
from paydesk.http.response import Response

type Next = Callable[[Request], Awaitable[Response]]


class Middleware(Protocol):
    """Wraps the rest of the chain: call ``next(request)`` to continue."""

    async def __call__(self, request: Request, next: Next) -> Response: ...
