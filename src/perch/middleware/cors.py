"""CORS middleware.

Answers preflight requests itself and adds the matching headers to
actual cross-origin responses.
"""

from dataclasses import dataclass

from perch.http.request import Request
from perch.http.response import Response
from perch.middleware.protocol import Handler


@dataclass(frozen=True, slots=True)
class CORSConfig:
    """CORS middleware configuration.

    All fields have secure defaults (no origin is allowed).
    Override what you need::

        CORSConfig(
            allow_origins=("https://example.com",),
            allow_methods=("GET", "POST"),
        )
    """

    allow_origins: tuple[str, ...] = ()
    allow_methods: tuple[str, ...] = ("GET", "POST", "PUT", "PATCH", "DELETE")
    allow_headers: tuple[str, ...] = (
        "Accept",
        "Content-Type",
        "Content-Length",
        "Accept-Encoding",
        "Authorization",
        "Origin",
    )
    expose_headers: tuple[str, ...] = ()
    allow_credentials: bool = False
    max_age: int = 600  # 10 minutes


class CORSMiddleware:
    """Cross-Origin Resource Sharing as a ``Handler -> Handler`` wrapper.

    Handles:
    - Preflight ``OPTIONS`` requests (204, never reaches the handler)
    - Actual requests from allowed origins (CORS headers on the response)
    - Wildcard origins (``"*"``) when credentials are disabled

    Usage::

        cors = CORSMiddleware(CORSConfig(allow_origins=("https://example.com",)))
        api = new_group({"/api": routes}, cors)
    """

    __slots__ = ("config",)

    def __init__(self, config: CORSConfig | None = None) -> None:
        self.config = config or CORSConfig()

    def _is_allowed_origin(self, origin: str) -> bool:
        if "*" in self.config.allow_origins:
            return True
        return origin in self.config.allow_origins

    def _is_allowed_method(self, method: str) -> bool:
        return method == "OPTIONS" or method in self.config.allow_methods

    def _add_cors_headers(self, response: Response, origin: str) -> Response:
        cfg = self.config

        if "*" in cfg.allow_origins and not cfg.allow_credentials:
            response = response.with_header("Access-Control-Allow-Origin", "*")
        else:
            response = response.with_header("Access-Control-Allow-Origin", origin)
            response = response.with_header("Vary", "Origin")

        if cfg.allow_credentials:
            response = response.with_header("Access-Control-Allow-Credentials", "true")

        if cfg.expose_headers:
            response = response.with_header(
                "Access-Control-Expose-Headers",
                ", ".join(cfg.expose_headers),
            )

        return response

    def _preflight_response(self, origin: str, request_method: str) -> Response:
        cfg = self.config
        response = Response(status=204)
        if not self._is_allowed_method(request_method):
            return response

        response = self._add_cors_headers(response, origin)
        response = response.with_header("Access-Control-Allow-Methods", ", ".join(cfg.allow_methods))
        if cfg.allow_headers:
            response = response.with_header(
                "Access-Control-Allow-Headers",
                ", ".join(cfg.allow_headers),
            )
        return response.with_header("Access-Control-Max-Age", str(cfg.max_age))

    def __call__(self, next: Handler) -> Handler:
        async def handler(request: Request) -> Response:
            origin = request.headers.get("origin")

            # Not a CORS request
            if origin is None or not self._is_allowed_origin(origin):
                return await next(request)

            request_method = request.headers.get("access-control-request-method")
            if request.method == "OPTIONS" and request_method:
                return self._preflight_response(origin, request_method)

            response = await next(request)
            return self._add_cors_headers(response, origin)

        return handler
