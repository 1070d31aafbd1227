"""Exceptions raised by paydesk.

Setup mistakes raise ``ConfigurationError`` and keep the app from
starting. ``HTTPError`` and its subclasses are turned into responses by
the serving layer; routing itself reports misses as data and only the
pipeline raises these.
"""

from collections.abc import Iterable


class PaydeskError(Exception):
    """Root of every paydesk exception."""


class ConfigurationError(PaydeskError):
    """Invalid routes or settings, found before the first request."""


class DuplicateRoute(ConfigurationError):  # noqa: N818
    """A second registration of a ``(method, path)`` pair or route name."""

    def __init__(self, method: str, path: str, detail: str = "") -> None:
        self.method = method
        self.path = path
        super().__init__(detail or f"Route {method} {path!r} is already registered.")


class HTTPError(PaydeskError):
    """A failure answered with ``status``.

    ``headers`` end up on the response that is sent, whether the default
    body or a registered error handler produced it.
    """

    def __init__(
        self, status: int, detail: str = "", headers: tuple[tuple[str, str], ...] = ()
    ) -> None:
        self.status = status
        self.detail = detail
        self.headers = headers
        super().__init__(status, detail)

    def __str__(self) -> str:
        return f"{self.status}: {self.detail}" if self.detail else str(self.status)


class NotFound(HTTPError):  # noqa: N818
    """Nothing is registered at the request path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(404, detail)


class MethodNotAllowed(HTTPError):  # noqa: N818
    """The path exists, under other methods only.

    *allowed* becomes the ``Allow`` header in the order given, repeats
    dropped.
    """

    def __init__(self, allowed: Iterable[str], detail: str = "") -> None:
        allow = ", ".join(dict.fromkeys(allowed))
        super().__init__(405, detail or f"Allowed methods: {allow}", (("Allow", allow),))
