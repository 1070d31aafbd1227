"""Turn whatever a handler returned into a ``Response``."""

from typing import Any

from kida import Environment

from paydesk.errors import ConfigurationError
from paydesk.http.response import Redirect, Response
from paydesk.templating.integration import render_template
from paydesk.templating.returns import Template


def negotiate(value: Any, templates: Environment | None = None) -> Response:
    """Accepted return values:

    - ``Response``: sent as is
    - ``Redirect``: empty body, its status, ``Location`` and extra headers
    - ``Template``: rendered with *templates* as HTML
    - ``str``: HTML
    - ``bytes``: ``application/octet-stream``
    - ``(value, status)``: *value* negotiated, status replaced

    Anything else is a ``TypeError``.
    """
    if isinstance(value, Response):
        return value
    if isinstance(value, Redirect):
        return Response(
            status=value.status,
            headers=(("Location", value.url), *value.headers),
        )
    if isinstance(value, Template):
        if templates is None:
            msg = f"Cannot render {value.name!r}: the app has no template environment yet."
            raise ConfigurationError(msg)
        return Response(render_template(templates, value))
    if isinstance(value, str):
        return Response(value)
    if isinstance(value, bytes):
        return Response(value, content_type="application/octet-stream")
    if isinstance(value, tuple) and len(value) == 2 and isinstance(value[1], int):
        return negotiate(value[0], templates).with_status(value[1])
    msg = (
        f"Cannot convert {type(value).__name__} to a response; return a Template, "
        "Redirect, Response, str or bytes."
    )
    raise TypeError(msg)
