"""Tests for perch.server.negotiation — return values to Response."""

import pytest

from perch.errors import ConfigurationError
from perch.http.request import Request
from perch.http.response import Response
from perch.server.negotiation import as_handler, negotiate


class TestNegotiate:
    def test_response_passthrough(self) -> None:
        response = Response("x", status=418)
        assert negotiate(response) is response

    def test_none_is_204(self) -> None:
        assert negotiate(None).status == 204

    def test_str(self) -> None:
        response = negotiate("hello")
        assert response.status == 200
        assert response.text == "hello"
        assert response.content_type.startswith("text/plain")

    def test_bytes(self) -> None:
        response = negotiate(b"\x00\x01")
        assert response.content_type == "application/octet-stream"

    def test_dict_is_json(self) -> None:
        response = negotiate({"a": 1})
        assert response.content_type == "application/json"
        assert response.text == '{"a": 1}'

    def test_list_is_json(self) -> None:
        assert negotiate([1, 2]).text == "[1, 2]"

    def test_status_tuple(self) -> None:
        response = negotiate(("created", 201))
        assert response.status == 201
        assert response.text == "created"

    def test_status_headers_tuple(self) -> None:
        response = negotiate(({"id": 1}, 201, {"Location": "/items/1"}))
        assert response.status == 201
        assert response.header("Location") == "/items/1"

    def test_unsupported(self) -> None:
        with pytest.raises(ConfigurationError, match="cannot be turned into a Response"):
            negotiate(object())


class TestAsHandler:
    @pytest.mark.anyio
    async def test_sync_function(self) -> None:
        def plain(request: Request) -> str:
            return request.path

        response = await as_handler(plain)(Request(method="GET", path="/p"))
        assert response.text == "/p"

    @pytest.mark.anyio
    async def test_async_function(self) -> None:
        async def coro(request: Request) -> tuple[str, int]:
            return "accepted", 202

        response = await as_handler(coro)(Request(method="GET", path="/"))
        assert response.status == 202

    @pytest.mark.anyio
    async def test_sync_function_in_thread(self) -> None:
        def plain(request: Request) -> dict:
            return {"method": request.method}

        response = await as_handler(plain, in_thread=True)(Request(method="PUT", path="/"))
        assert response.text == '{"method": "PUT"}'
