"""Content negotiation — maps handler return values to Response objects.

Terminal handlers may return whatever is convenient; middlewares always
receive a ``Response``. isinstance-based dispatch, no magic, fully
predictable.
"""

import json as json_module
from collections.abc import Callable
from typing import Any

from perch._internal.invoke import invoke
from perch.errors import ConfigurationError
from perch.http.request import Request
from perch.http.response import Response
from perch.middleware.protocol import Handler


def negotiate(value: Any) -> Response:
    """Convert a terminal handler's return value to a Response.

    Dispatch order:

    1. ``Response``            -> pass through
    2. ``None``                -> 204, empty body
    3. ``str``                 -> 200, text/plain
    4. ``bytes``               -> 200, application/octet-stream
    5. ``dict`` / ``list``     -> 200, application/json
    6. ``(value, int)``        -> negotiate value, override status
    7. ``(value, int, dict)``  -> negotiate value, override status + headers
    """
    match value:
        case Response():
            return value
        case None:
            return Response(status=204)
        case str():
            return Response(body=value)
        case bytes():
            return Response(body=value, content_type="application/octet-stream")
        case dict() | list():
            return Response(
                body=json_module.dumps(value, default=str),
                content_type="application/json",
            )
        case (inner, int() as status):
            return negotiate(inner).with_status(status)
        case (inner, int() as status, dict() as headers):
            return negotiate(inner).with_status(status).with_headers(headers)
        case _:
            msg = (
                f"Handler returned {type(value).__name__!r}, which cannot be "
                "turned into a Response. Return a Response, str, bytes, dict, "
                "list, None, or a (value, status[, headers]) tuple."
            )
            raise ConfigurationError(msg)


def as_handler(func: Callable[..., Any], *, in_thread: bool = False) -> Handler:
    """Adapt a terminal handler (sync or async, any return) to a ``Handler``.

    *func* is not inspected until a request arrives, so a ``None`` handler
    fails with ``TypeError`` at request time.
    """

    async def handler(request: Request) -> Response:
        return negotiate(await invoke(func, request, in_thread=in_thread))

    return handler
