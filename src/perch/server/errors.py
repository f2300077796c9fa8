"""Error mapping for perch requests.

Only ``HTTPError`` is handled here. Anything else raised by a chain is
either contained by ``RecoveryMiddleware`` or left to the ASGI server.
"""

import logging

from perch.errors import HTTPError
from perch.http.request import Request
from perch.http.response import Response

logger = logging.getLogger("perch.server")


def handle_http_error(exc: HTTPError, request: Request) -> Response:
    """Map an HTTPError to a plain-text Response carrying its headers."""
    logger.debug("%d %s %s — %s", exc.status, request.method, request.path, exc.detail)

    detail = exc.detail or f"Error {exc.status}"
    response = Response(body=f"{detail}\n", status=exc.status)
    for name, value in exc.headers:
        response = response.with_header(name, value)
    return response
