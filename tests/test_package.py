"""Tests for the top-level ``perch`` namespace and the mux's ASGI surface."""

import pytest

import perch
from perch.routing.mux import ServeMux


def test_lazy_exports() -> None:
    assert perch.ServeMux is ServeMux
    assert perch.ANY_METHOD == ""
    assert callable(perch.bind_routes_to_mux)
    assert callable(perch.chain)


def test_unknown_attribute() -> None:
    with pytest.raises(AttributeError):
        perch.does_not_exist  # noqa: B018


@pytest.mark.anyio
async def test_lifespan_acknowledged() -> None:
    incoming = iter([{"type": "lifespan.startup"}, {"type": "lifespan.shutdown"}])
    sent: list[dict] = []

    async def receive() -> dict:
        return next(incoming)

    async def send(message: dict) -> None:
        sent.append(message)

    await ServeMux()({"type": "lifespan"}, receive, send)

    assert [m["type"] for m in sent] == [
        "lifespan.startup.complete",
        "lifespan.shutdown.complete",
    ]
