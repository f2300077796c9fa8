"""Tests for perch.server.sender response emission rules."""

import pytest

from perch.http.response import Response
from perch.server.sender import send_response


async def _emit(response: Response, method: str = "GET") -> list[dict]:
    messages: list[dict] = []

    async def send(message: dict) -> None:
        messages.append(message)

    await send_response(response, send, method=method)
    return messages


class TestSendResponse:
    @pytest.mark.anyio
    async def test_200_preserves_body(self) -> None:
        messages = await _emit(Response("ok").with_header("X-Id", "7"))
        headers = dict(messages[0]["headers"])
        assert messages[0]["status"] == 200
        assert headers[b"content-length"] == b"2"
        assert headers[b"x-id"] == b"7"
        assert messages[1]["body"] == b"ok"

    @pytest.mark.anyio
    async def test_204_drops_body(self) -> None:
        messages = await _emit(Response("unexpected-body").with_status(204))
        assert dict(messages[0]["headers"])[b"content-length"] == b"0"
        assert messages[1]["body"] == b""

    @pytest.mark.anyio
    async def test_head_drops_body(self) -> None:
        messages = await _emit(Response("body"), method="HEAD")
        assert messages[1]["body"] == b""
