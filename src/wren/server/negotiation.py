"""Content negotiation — convert handler return values to Response.

Dispatch order:

1. ``Response``         -> pass through
2. ``None``             -> 200, empty body
3. ``str``              -> 200, text/plain
4. ``bytes``            -> 200, application/octet-stream
5. ``dict`` / ``list``  -> 200, application/json
6. ``(value, int)``     -> negotiate value, override status
7. ``(value, int, dict)`` -> negotiate value, override status + headers
"""

from typing import Any

from wren.errors import ConfigurationError
from wren.http.response import Response


def negotiate(value: Any) -> Response:
    """Convert a handler's return value to a ``Response``."""
    match value:
        case Response():
            return value
        case None:
            return Response(body="")
        case str():
            return Response(body=value)
        case bytes():
            return Response(body=value, content_type="application/octet-stream")
        case dict() | list():
            return Response.json(value)
        case (body, int() as status):
            return negotiate(body).with_status(status)
        case (body, int() as status, dict() as headers):
            return negotiate(body).with_status(status).with_headers(headers)
        case _:
            msg = (
                f"Cannot convert {type(value).__name__} to a response. "
                "Return a Response, str, bytes, dict, list, or a (value, status) tuple."
            )
            raise ConfigurationError(msg)
