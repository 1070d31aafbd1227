"""Write a ``Response`` to the ASGI ``send`` channel."""

from paydesk._internal.types import Send
from paydesk.http.response import Response


def has_body(status: int) -> bool:
    """False for informational, 204 and 304 statuses."""
    return status >= 200 and status not in (204, 304)


async def send_response(response: Response, send: Send, *, head: bool = False) -> None:
    """Send the start and body messages for *response*.

    ``content-length`` always reflects the body the status allows; a
    HEAD request gets the same headers and an empty body.
    """
    body = response.body_bytes if has_body(response.status) else b""
    headers = [(b"content-type", response.content_type.encode("latin-1"))]
    headers += [(k.lower().encode("latin-1"), v.encode("latin-1")) for k, v in response.headers]
    headers.append((b"content-length", b"%d" % len(body)))

    await send({"type": "http.response.start", "status": response.status, "headers": headers})
    await send({"type": "http.response.body", "body": b"" if head else body})
