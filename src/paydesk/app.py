"""The ``App`` object: register during setup, serve once frozen."""

import threading
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

from kida import Environment

from paydesk._internal.invoke import invoke
from paydesk._internal.types import ErrorHandler, Handler, Receive, Scope, Send
from paydesk.config import AppConfig
from paydesk.middleware.protocol import Middleware
from paydesk.routing.router import Router, RouteTable
from paydesk.server.handler import handle_request
from paydesk.templating.integration import create_environment


@dataclass(frozen=True, slots=True)
class _Runtime:
    """What requests read once the app is frozen."""

    routes: RouteTable
    middleware: tuple[Middleware, ...]
    templates: Environment


class App:
    """Routes, middleware, error handlers and hooks for one site.

    Everything is registered up front. The first request, lifespan
    startup or ``routes`` lookup compiles that setup into a read-only
    runtime; registering anything afterwards raises ``RuntimeError``.
    Compilation happens once, under a lock, even if several workers hit
    the app at the same moment.
    """

    __slots__ = (
        "_compile_lock",
        "_error_handlers",
        "_globals",
        "_hooks",
        "_middleware",
        "_providers",
        "_router",
        "_runtime",
        "_user_env",
        "config",
    )

    def __init__(
        self, config: AppConfig | None = None, *, kida_env: Environment | None = None
    ) -> None:
        self.config = config or AppConfig()
        self._router = Router()
        self._middleware: list[Middleware] = []
        self._error_handlers: dict[int | type, ErrorHandler] = {}
        self._providers: dict[type, Callable[..., Any]] = {}
        self._globals: dict[str, Any] = {}
        self._hooks: dict[str, list[Callable[..., Any]]] = {"startup": [], "shutdown": []}
        self._user_env = kida_env
        self._runtime: _Runtime | None = None
        self._compile_lock = threading.Lock()

    # -- Setup --

    def route(
        self,
        path: str,
        *,
        methods: Iterable[str] | None = None,
        name: str | None = None,
    ) -> Callable[[Handler], Handler]:
        """Decorator form of ``add_route``."""

        def decorator(func: Handler) -> Handler:
            self.add_route(path, func, methods=methods, name=name)
            return func

        return decorator

    def add_route(
        self,
        path: str,
        handler: Handler,
        *,
        methods: Iterable[str] | None = None,
        name: str | None = None,
    ) -> None:
        """Bind *handler* to *path* for each of *methods* (default ``GET``).

        ``"payment"`` and ``"/payment/"`` name the same path. *name*, for
        ``url_for``, goes on the first method's rule. If any method is
        rejected (``DuplicateRoute``, ``ConfigurationError``) no rule is
        added.
        """
        self._require_setup()
        self._router.register_methods(tuple(methods or ("GET",)), path, handler, name=name)

    def provide(self, annotation: type, factory: Callable[..., Any]) -> None:
        """Inject ``factory()`` into handler parameters annotated *annotation*."""
        self._require_setup()
        self._providers[annotation] = factory

    def error(
        self, code_or_exception: int | type[Exception]
    ) -> Callable[[ErrorHandler], ErrorHandler]:
        """Decorator registering the handler for a status or exception class."""

        def decorator(func: ErrorHandler) -> ErrorHandler:
            self._require_setup()
            self._error_handlers[code_or_exception] = func
            return func

        return decorator

    def add_middleware(self, middleware: Middleware) -> None:
        self._require_setup()
        self._middleware.append(middleware)

    def template_global(
        self, name: str | None = None
    ) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """Decorator exposing a callable to every template."""

        def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
            self._require_setup()
            self._globals[name or func.__name__] = func
            return func

        return decorator

    def on_startup(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Run *func* (sync or async) at lifespan startup."""
        self._require_setup()
        self._hooks["startup"].append(func)
        return func

    def on_shutdown(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Run *func* (sync or async) at lifespan shutdown."""
        self._require_setup()
        self._hooks["shutdown"].append(func)
        return func

    # -- Runtime --

    @property
    def routes(self) -> RouteTable:
        """The compiled route table; compiles the app on first access."""
        return self._compile().routes

    def url_for(self, name: str) -> str:
        """Path of the route called *name*; ``KeyError`` if there is none."""
        return self.routes.path_for(name)

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Compile and serve with pounce, using ``config`` for the rest."""
        from paydesk.server.serve import run_server

        self._compile()
        run_server(
            self,
            host or self.config.host,
            port or self.config.port,
            workers=self.config.workers,
            reload=self.config.debug,
            log_level=self.config.log_level,
            log_format=self.config.log_format,
        )

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3 entry point for ``lifespan`` and ``http`` scopes."""
        if scope["type"] == "lifespan":
            await self._lifespan(receive, send)
            return

        runtime = self._compile()
        await handle_request(
            scope,
            receive,
            send,
            routes=runtime.routes,
            middleware=runtime.middleware,
            error_handlers=self._error_handlers,
            templates=runtime.templates,
            providers=self._providers,
            debug=self.config.debug,
        )

    async def _lifespan(self, receive: Receive, send: Send) -> None:
        while True:
            message = await receive()
            if message["type"] == "lifespan.startup":
                try:
                    await self.startup()
                except Exception as exc:
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})
            elif message["type"] == "lifespan.shutdown":
                await self.shutdown()
                await send({"type": "lifespan.shutdown.complete"})
                return

    async def startup(self) -> None:
        """Compile, then run startup hooks in registration order."""
        self._compile()
        for hook in self._hooks["startup"]:
            await invoke(hook)

    async def shutdown(self) -> None:
        for hook in self._hooks["shutdown"]:
            await invoke(hook)

    # -- Internal --

    def _compile(self) -> _Runtime:
        if self._runtime is not None:
            return self._runtime
        with self._compile_lock:
            if self._runtime is None:
                routes = self._router.compile()
                globals_ = {"url_for": routes.path_for, **self._globals}
                if self._user_env is None:
                    templates = create_environment(self.config, globals_)
                else:
                    templates = self._user_env
                    for name, value in globals_.items():
                        templates.add_global(name, value)
                self._runtime = _Runtime(routes, tuple(self._middleware), templates)
        return self._runtime

    def _require_setup(self) -> None:
        if self._runtime is not None:
            msg = (
                "Cannot modify the app once it is serving. Register routes, "
                "middleware, hooks and globals before the first request."
            )
            raise RuntimeError(msg)
