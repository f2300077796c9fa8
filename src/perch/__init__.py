"""Perch — route tables and middleware chains for ASGI.

Declare routes as plain dicts, group them under prefixes, layer
middleware, and bind the result to a multiplexer.

Basic usage::

    from perch import ServeMux, bind_routes_to_mux, new_group, new_handler
    from perch.middleware import RecoveryMiddleware, enforce_json

    async def list_users(request):
        return [{"id": 1}]

    users = new_group(
        {"/api/v1/users": {"/list": {"GET": new_handler(list_users, enforce_json)}}},
        RecoveryMiddleware(logging.getLogger("app")),
    )

    mux = ServeMux()
    bind_routes_to_mux(mux, users)
    # mux is an ASGI application: uvicorn app:mux
"""

__version__ = "0.1.0"
__all__ = [
    "ANY_METHOD",
    "Action",
    "ConfigurationError",
    "GroupRoute",
    "HTTPError",
    "MethodNotAllowed",
    "Middleware",
    "MuxConfig",
    "NotFound",
    "PerchError",
    "Request",
    "Response",
    "RouteTable",
    "ServeMux",
    "bind_routes_to_mux",
    "chain",
    "merge_routes",
    "new_group",
    "new_group_route",
    "new_handler",
    "set_middleware",
]

_ROUTING = frozenset(
    {
        "ANY_METHOD",
        "Action",
        "GroupRoute",
        "RouteTable",
        "ServeMux",
        "bind_routes_to_mux",
        "merge_routes",
        "new_group",
        "new_group_route",
        "new_handler",
        "set_middleware",
    }
)


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import perch`` fast while providing a clean top-level API.
    """
    if name in _ROUTING:
        from perch import routing as _routing

        return getattr(_routing, name)

    if name == "MuxConfig":
        from perch.config import MuxConfig

        return MuxConfig

    if name in ("Request", "Response"):
        from perch import http as _http

        return getattr(_http, name)

    if name in ("Middleware", "chain"):
        from perch.middleware import protocol as _mw

        return getattr(_mw, name)

    if name in ("PerchError", "ConfigurationError", "HTTPError", "MethodNotAllowed", "NotFound"):
        from perch import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
