"""ASGI handler — translates ASGI scope/messages to perch types.

Converts the scope dict to a typed Request, looks the path up in the
mux, runs the registered chain and sends the Response back through
ASGI send().
"""

from typing import TYPE_CHECKING

from perch._internal.asgi import Receive, Scope, Send
from perch.errors import HTTPError
from perch.http.request import Request
from perch.server.errors import handle_http_error
from perch.server.sender import send_response

if TYPE_CHECKING:
    from perch.routing.mux import ServeMux


async def handle_request(scope: Scope, receive: Receive, send: Send, *, mux: "ServeMux") -> None:
    """Process a single HTTP request through the mux.

    Exceptions other than ``HTTPError`` are not caught: they reach the
    ASGI server unless a recovery middleware in the chain handles them.
    """
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope, receive)

    try:
        match = mux.lookup(request.method, request.path)
        response = await match.handler(request.with_path_params(match.path_params))
    except HTTPError as exc:
        response = handle_http_error(exc, request)

    await send_response(response, send, method=request.method)
