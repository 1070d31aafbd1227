"""paydesk: a small card-payment site.

Serve the bundled site::

    from paydesk.web import create_app

    create_app().run()

The pieces it is built from are importable from here too::

    from paydesk import App, Redirect, Template
"""

from importlib import import_module

__version__ = "0.1.0"

# Public name -> defining module, imported on first access
_EXPORTS = {
    "App": "paydesk.app",
    "AppConfig": "paydesk.config",
    "ConfigurationError": "paydesk.errors",
    "DuplicateRoute": "paydesk.errors",
    "HTTPError": "paydesk.errors",
    "MethodNotAllowed": "paydesk.errors",
    "NotFound": "paydesk.errors",
    "PaydeskError": "paydesk.errors",
    "Redirect": "paydesk.http.response",
    "Request": "paydesk.http.request",
    "Response": "paydesk.http.response",
    "RouteTable": "paydesk.routing.router",
    "Router": "paydesk.routing.router",
    "Template": "paydesk.templating.returns",
}

__all__ = sorted(_EXPORTS)


def __getattr__(name: str) -> object:
    if name in _EXPORTS:
        return getattr(import_module(_EXPORTS[name]), name)
    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
