"""One access-log line per request."""

import logging
import time

from paydesk.errors import HTTPError
from paydesk.http.request import Request
from paydesk.http.response import Response
from paydesk.middleware.protocol import Next

logger = logging.getLogger("paydesk.access")


class RequestLogger:
    """Log method, path, status and elapsed milliseconds.

    An ``HTTPError`` from further down the chain (a 404 or 405 from
    dispatch, say) is logged with its status at INFO. Any other exception
    is logged at WARNING. Both are re-raised so the error pipeline still
    renders them.
    """

    __slots__ = ("_logger",)

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._logger = log or logger

    async def __call__(self, request: Request, next: Next) -> Response:
        start = time.perf_counter()
        try:
            response = await next(request)
        except HTTPError as exc:
            self._log(request, exc.status, start)
            raise
        except Exception as exc:
            elapsed = (time.perf_counter() - start) * 1000
            self._logger.warning(
                "%s %s failed after %.1fms: %s", request.method, request.path, elapsed, exc
            )
            raise
        self._log(request, response.status, start)
        return response

    def _log(self, request: Request, status: int, start: float) -> None:
        elapsed = (time.perf_counter() - start) * 1000
        self._logger.info("%s %s %d %.1fms", request.method, request.path, status, elapsed)
