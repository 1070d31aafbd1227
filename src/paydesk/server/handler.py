"""The per-request pipeline behind ``App.__call__``.

Builds a ``Request`` from the scope, runs it through the middleware
chain into dispatch, renders errors, and writes the response.
"""

import dataclasses
import inspect
from collections.abc import Callable, Mapping
from typing import Any

from kida import Environment

from paydesk._internal.invoke import invoke
from paydesk._internal.types import Handler, Receive, Scope, Send
from paydesk.errors import HTTPError
from paydesk.http.request import Request
from paydesk.http.response import Response
from paydesk.middleware.protocol import Middleware, Next
from paydesk.routing.route import MissReason, RouteMatch, RouteMiss
from paydesk.routing.router import RouteTable
from paydesk.server.errors import render_http_error, render_internal_error
from paydesk.server.negotiation import negotiate
from paydesk.server.sender import send_response


def resolve(routes: RouteTable, method: str, path: str) -> RouteMatch | RouteMiss:
    """Dispatch, serving ``HEAD`` from the ``GET`` rule when it has none.

    Because of that fallback, a 405 for a path with a ``GET`` rule also
    lists ``HEAD`` as allowed.
    """
    result = routes.dispatch(method, path)
    if isinstance(result, RouteMatch):
        return result
    if result.method == "HEAD":
        fallback = routes.dispatch("GET", path)
        if isinstance(fallback, RouteMatch):
            return fallback
    if (
        result.reason is MissReason.METHOD_NOT_ALLOWED
        and "GET" in result.allowed
        and "HEAD" not in result.allowed
    ):
        return dataclasses.replace(result, allowed=(*result.allowed, "HEAD"))
    return result


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    routes: RouteTable,
    middleware: tuple[Middleware, ...],
    error_handlers: Mapping[int | type, Callable[..., Any]],
    templates: Environment | None,
    providers: Mapping[type, Callable[..., Any]],
    debug: bool,
) -> None:
    if scope["type"] != "http":
        return
    request = Request.from_asgi(scope, receive)

    async def dispatch(req: Request) -> Response:
        result = resolve(routes, req.method, req.path)
        if isinstance(result, RouteMiss):
            raise result.to_error()
        kwargs = handler_kwargs(result.handler, req, providers)
        return negotiate(await invoke(result.handler, **kwargs), templates)

    chain: Next = dispatch
    # First registered ends up outermost
    for mw in reversed(middleware):
        chain = _link(mw, chain)

    try:
        response = await chain(request)
    except HTTPError as exc:
        response = await render_http_error(exc, request, error_handlers, templates, debug=debug)
    except Exception as exc:
        response = await render_internal_error(exc, request, error_handlers, templates, debug=debug)

    await send_response(response, send, head=request.method == "HEAD")


def _link(mw: Middleware, inner: Next) -> Next:
    async def step(request: Request) -> Response:
        return await mw(request, inner)

    return step


def handler_kwargs(
    handler: Handler,
    request: Request,
    providers: Mapping[type, Callable[..., Any]],
) -> dict[str, Any]:
    """Arguments for *handler*, chosen from its signature.

    A parameter named ``request`` or annotated ``Request`` gets the
    request; one whose annotation has a provider gets a fresh value from
    that provider. Anything else is left to its default.
    """
    kwargs: dict[str, Any] = {}
    for name, param in inspect.signature(handler, eval_str=True).parameters.items():
        if name == "request" or param.annotation is Request:
            kwargs[name] = request
        elif param.annotation in providers:
            kwargs[name] = providers[param.annotation]()
    return kwargs
