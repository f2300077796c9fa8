"""Content-Type enforcement."""

import re

from perch.http.request import Request
from perch.http.response import Response
from perch.middleware.protocol import Handler

# RFC 9110 token, plus quoted-string for parameter values
_TOKEN = r"[!#$%&'*+\-.^_`|~0-9A-Za-z]+"
_VALUE = rf'(?:{_TOKEN}|"(?:[^"\\]|\\.)*")'
_CONTENT_TYPE_RE = re.compile(
    rf"\s*({_TOKEN}/{_TOKEN})\s*(?:;\s*{_TOKEN}={_VALUE}\s*)*;?\s*"
)


def _error(detail: str, status: int) -> Response:
    return Response(body=f"{detail}\n", status=status).with_header(
        "X-Content-Type-Options", "nosniff"
    )


def _media_type(value: str) -> str | None:
    """``"Application/JSON; charset=utf-8"`` -> ``"application/json"``; None if malformed."""
    match = _CONTENT_TYPE_RE.fullmatch(value)
    if match is None:
        return None
    return match.group(1).lower()


def enforce_json(next: Handler) -> Handler:
    """Reject requests whose body is not declared as JSON.

    Missing or unparsable ``Content-Type`` -> 400. Any other media type
    than ``application/json`` -> 415. Well-formed parameters are ignored.
    """

    async def handler(request: Request) -> Response:
        content_type = request.content_type
        if not content_type:
            return _error("Content-Type header is not set", 400)
        media_type = _media_type(content_type)
        if media_type is None:
            return _error("Content-Type header is malformed", 400)
        if media_type != "application/json":
            return _error("Content-Type header must be application/json", 415)
        return await next(request)

    return handler
