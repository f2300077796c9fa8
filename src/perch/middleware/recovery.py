"""Recovery middleware — turns an escaping exception into a 500."""

import logging

from perch.errors import HTTPError
from perch.http.request import Request
from perch.http.response import Response
from perch.middleware.protocol import Handler


class RecoveryMiddleware:
    """Contain faults raised further down the chain.

    Place it first in a middleware list so it wraps everything after it::

        recovery = RecoveryMiddleware(logging.getLogger("myapp"))
        new_handler(create_user, recovery, enforce_json)

    ``HTTPError`` is not a fault: it passes through so the mux can answer
    with its status. The logger is passed in explicitly and only read, so
    one instance can serve any number of routes and concurrent requests.
    """

    __slots__ = ("logger",)

    def __init__(self, logger: logging.Logger) -> None:
        self.logger = logger

    def __call__(self, next: Handler) -> Handler:
        logger = self.logger

        async def handler(request: Request) -> Response:
            try:
                return await next(request)
            except HTTPError:
                raise
            except Exception as exc:
                logger.exception("panic recovered: %s %s: %r", request.method, request.path, exc)
                return Response(body="Internal Server Error\n", status=500).with_header(
                    "X-Content-Type-Options", "nosniff"
                )

        return handler
