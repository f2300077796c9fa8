"""Handler and Middleware types, and the chaining rule.

A handler is any async callable taking a request::

    async def handler(request: Request) -> Response: ...

A middleware wraps one handler in another::

    def timing(next: Handler) -> Handler:
        async def handler(request: Request) -> Response:
            start = time.monotonic()
            response = await next(request)
            elapsed = time.monotonic() - start
            return response.with_header("X-Time", f"{elapsed:.3f}")

        return handler

No base class required. Functions, closures and callable objects all
qualify. Whatever state a middleware needs must be captured when it is
constructed; the returned handler is shared by concurrent requests.
"""

from collections.abc import Awaitable, Callable
from typing import TypeAlias

from perch.http.request import Request
from perch.http.response import Response

# The request handler both terminal handlers and wrapped chains satisfy
Handler: TypeAlias = Callable[[Request], Awaitable[Response]]

# A wrapper producing a new handler around an existing one
Middleware: TypeAlias = Callable[[Handler], Handler]


def chain(handler: Handler, *middlewares: Middleware) -> Handler:
    """Wrap *handler* so the first middleware is the outermost.

    ``chain(h, m1, m2, m3)`` builds ``m1(m2(m3(h)))``: on an incoming
    request ``m1`` runs first and ``m3`` runs last before ``h``. On the
    way back out the order reverses.
    """
    for middleware in reversed(middlewares):
        handler = middleware(handler)
    return handler
