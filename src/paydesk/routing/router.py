"""Route registration and exact-match dispatch.

Routes are registered on a ``Router`` during setup and compiled into an
immutable ``RouteTable`` when the app freezes. The table is shared by
every request without locking.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from paydesk._internal.types import Handler
from paydesk.errors import ConfigurationError, DuplicateRoute
from paydesk.routing.route import DispatchResult, MissReason, RouteMatch, RouteMiss, RouteRule

SUPPORTED_METHODS: frozenset[str] = frozenset(
    {"GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"}
)

_FORBIDDEN_PATH_CHARS = frozenset("{}<>?# \t\r\n")


def normalize_path(path: str) -> str:
    """Normalize a route or request path.

    Examples::

        ""            -> "/"
        "/"           -> "/"
        "payment"     -> "/payment"
        "/payment/"   -> "/payment"
        "//api//v1"   -> "/api/v1"
    """
    parts = [p for p in path.split("/") if p]
    return "/" + "/".join(parts)


def _validate_path(path: str) -> None:
    bad = _FORBIDDEN_PATH_CHARS.intersection(path)
    if not bad:
        return
    if bad & {"{", "}", "<", ">"}:
        msg = (
            f"Route path {path!r} uses parameter syntax. Paths are matched "
            "literally; register one route per concrete path."
        )
    else:
        shown = ", ".join(repr(c) for c in sorted(bad))
        msg = f"Route path {path!r} contains unsupported characters: {shown}"
    raise ConfigurationError(msg)


@dataclass(frozen=True, slots=True)
class RouteTable:
    """An immutable, ordered sequence of route rules.

    Built once by ``Router.compile()``. Read-only afterwards, so it can
    be shared by any number of concurrent request handlers.
    """

    rules: tuple[RouteRule, ...] = ()

    def __iter__(self) -> Iterator[RouteRule]:
        return iter(self.rules)

    def __len__(self) -> int:
        return len(self.rules)

    def dispatch(self, method: str, path: str) -> DispatchResult:
        """Resolve a request method and path to a handler.

        Rules are scanned in registration order and the first exact
        ``(method, path)`` match wins. A path that matches only under
        other methods yields ``METHOD_NOT_ALLOWED``; anything else
        yields ``NOT_FOUND``. Never raises.
        """
        method = method.upper()
        path = normalize_path(path)
        allowed: list[str] = []

        for rule in self.rules:
            if rule.path != path:
                continue
            if rule.method == method:
                return RouteMatch(rule)
            allowed.append(rule.method)

        if allowed:
            return RouteMiss(MissReason.METHOD_NOT_ALLOWED, method, path, tuple(allowed))
        return RouteMiss(MissReason.NOT_FOUND, method, path)

    def allowed_methods(self, path: str) -> tuple[str, ...]:
        """Return the methods registered for *path*, in registration order."""
        path = normalize_path(path)
        return tuple(rule.method for rule in self.rules if rule.path == path)

    def path_for(self, name: str) -> str:
        """Return the path of the route registered as *name*.

        Raises ``KeyError`` if no route has that name.
        """
        for rule in self.rules:
            if rule.name == name:
                return rule.path
        raise KeyError(name)


class Router:
    """Collects route rules during setup.

    Usage::

        router = Router()
        router.register("GET", "payment", show_form, name="payment")
        router.register("POST", "charge", submit_charge)
        table = router.compile()
        result = table.dispatch("POST", "/charge")
    """

    __slots__ = ("_compiled", "_keys", "_names", "_rules")

    def __init__(self) -> None:
        self._rules: list[RouteRule] = []
        self._keys: set[tuple[str, str]] = set()
        self._names: set[str] = set()
        self._compiled = False

    def register(
        self,
        method: str,
        path: str,
        handler: Handler,
        *,
        name: str | None = None,
    ) -> RouteRule:
        """Add one rule. Must be called before compile()."""
        return self.register_methods((method,), path, handler, name=name)[0]

    def register_methods(
        self,
        methods: Iterable[str],
        path: str,
        handler: Handler,
        *,
        name: str | None = None,
    ) -> tuple[RouteRule, ...]:
        """Add one rule per method for *path*, all or none.

        Every method is checked before any rule is added, so a failure
        leaves the router as it was. *name* goes on the first rule.

        Raises ``DuplicateRoute`` if a ``(method, path)`` pair or *name*
        is already taken, ``ConfigurationError`` for unsupported methods
        or path syntax.
        """
        if self._compiled:
            msg = "Cannot add routes after compilation."
            raise RuntimeError(msg)

        _validate_path(path)
        path = normalize_path(path)
        keys: list[tuple[str, str]] = []
        for method in methods:
            method = method.upper()
            if method not in SUPPORTED_METHODS:
                msg = f"Unsupported HTTP method {method!r} for route {path!r}."
                raise ConfigurationError(msg)
            if (method, path) in self._keys or (method, path) in keys:
                raise DuplicateRoute(method, path)
            keys.append((method, path))
        if not keys:
            msg = f"Route {path!r} needs at least one method."
            raise ConfigurationError(msg)
        if name is not None and name in self._names:
            raise DuplicateRoute(keys[0][0], path, f"Route name {name!r} is already registered.")

        added = tuple(
            RouteRule(method=method, path=path, handler=handler, name=name if i == 0 else None)
            for i, (method, _) in enumerate(keys)
        )
        self._rules.extend(added)
        self._keys.update(keys)
        if name is not None:
            self._names.add(name)
        return added

    @property
    def rules(self) -> tuple[RouteRule, ...]:
        """Rules registered so far, in registration order."""
        return tuple(self._rules)

    def compile(self) -> RouteTable:
        """Freeze the router and return the route table."""
        self._compiled = True
        return RouteTable(tuple(self._rules))
