"""Render failures as responses.

An ``HTTPError`` goes to the handler registered for its class or status,
or gets a short plain-text body. Anything else is a 500, logged with its
traceback.
"""

import inspect
import logging
import traceback
from collections.abc import Callable, Mapping
from html import escape
from typing import Any

from kida import Environment

from paydesk._internal.invoke import invoke
from paydesk.errors import HTTPError
from paydesk.http.request import Request
from paydesk.http.response import Response
from paydesk.server.negotiation import negotiate

logger = logging.getLogger("paydesk.server")

type ErrorHandlers = Mapping[int | type, Callable[..., Any]]


def _lookup(handlers: ErrorHandlers, exc: Exception, status: int) -> Callable[..., Any] | None:
    return handlers.get(type(exc)) or handlers.get(status)


async def _run_handler(
    handler: Callable[..., Any],
    request: Request,
    exc: Exception,
    status: int,
    templates: Environment | None,
) -> Response:
    # Handlers take (), (request) or (request, exc)
    arity = len(inspect.signature(handler).parameters)
    args = (request, exc)[:arity]
    response = negotiate(await invoke(handler, *args), templates)
    return response.with_status(status) if response.status == 200 else response


async def render_http_error(
    exc: HTTPError,
    request: Request,
    handlers: ErrorHandlers,
    templates: Environment | None,
    *,
    debug: bool,
) -> Response:
    logger.debug("%d %s %s: %s", exc.status, request.method, request.path, exc.detail)

    handler = _lookup(handlers, exc, exc.status)
    if handler is not None:
        response = await _run_handler(handler, request, exc, exc.status, templates)
    else:
        body = f"{exc.status}: {exc.detail}" if debug and exc.detail else exc.detail
        response = Response(
            body or f"Error {exc.status}",
            status=exc.status,
            content_type="text/plain; charset=utf-8",
        )

    # Allow on a 405 survives a custom handler
    for name, value in exc.headers:
        if response.header(name) is None:
            response = response.with_header(name, value)
    return response


async def render_internal_error(
    exc: Exception,
    request: Request,
    handlers: ErrorHandlers,
    templates: Environment | None,
    *,
    debug: bool,
) -> Response:
    logger.exception("500 %s %s", request.method, request.path)

    handler = _lookup(handlers, exc, 500)
    if handler is not None:
        return await _run_handler(handler, request, exc, 500, templates)
    if debug:
        trace = escape("".join(traceback.format_exception(exc)))
        return Response(f"<h1>500 Internal Server Error</h1><pre>{trace}</pre>", status=500)
    return Response("Internal Server Error", status=500)
