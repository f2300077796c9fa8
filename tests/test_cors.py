"""Tests for CORS middleware."""

import pytest

from perch.http.request import Request
from perch.middleware.cors import CORSConfig, CORSMiddleware
from perch.routing.action import new_handler
from perch.routing.binder import bind_routes_to_mux
from perch.routing.mux import ServeMux
from perch.routing.table import ANY_METHOD, new_group
from perch.testing import TestClient


async def _data(request: Request) -> dict:
    return {"message": "hello"}


def _make_cors_mux(config: CORSConfig | None = None) -> ServeMux:
    """Helper: a mux whose /api group is wrapped in CORS middleware."""
    mux = ServeMux()
    table = new_group({"/api": {"/data": {ANY_METHOD: new_handler(_data)}}}, CORSMiddleware(config))
    bind_routes_to_mux(mux, table)
    return mux


def _header_names(response) -> set[str]:
    return {name for name, _ in response.headers}


class TestCORSNonCorsRequests:
    """Requests without an Origin header pass through unaffected."""

    @pytest.mark.anyio
    async def test_no_origin_header(self) -> None:
        async with TestClient(_make_cors_mux(CORSConfig(allow_origins=("*",)))) as client:
            response = await client.get("/api/data")
        assert response.status == 200
        assert "access-control-allow-origin" not in _header_names(response)


class TestCORSSimpleRequests:
    @pytest.mark.anyio
    async def test_allowed_origin_gets_cors_headers(self) -> None:
        mux = _make_cors_mux(CORSConfig(allow_origins=("https://example.com",)))
        async with TestClient(mux) as client:
            response = await client.get("/api/data", headers={"Origin": "https://example.com"})
        assert response.status == 200
        assert ("access-control-allow-origin", "https://example.com") in response.headers
        assert ("vary", "Origin") in response.headers

    @pytest.mark.anyio
    async def test_disallowed_origin_no_cors_headers(self) -> None:
        mux = _make_cors_mux(CORSConfig(allow_origins=("https://example.com",)))
        async with TestClient(mux) as client:
            response = await client.get("/api/data", headers={"Origin": "https://evil.com"})
        assert response.status == 200
        assert "access-control-allow-origin" not in _header_names(response)

    @pytest.mark.anyio
    async def test_wildcard_origin(self) -> None:
        async with TestClient(_make_cors_mux(CORSConfig(allow_origins=("*",)))) as client:
            response = await client.get("/api/data", headers={"Origin": "https://anything.com"})
        assert ("access-control-allow-origin", "*") in response.headers
        assert ("vary", "Origin") not in response.headers

    @pytest.mark.anyio
    async def test_credentials_echo_origin(self) -> None:
        config = CORSConfig(
            allow_origins=("*",),
            allow_credentials=True,
            expose_headers=("X-Total",),
        )
        async with TestClient(_make_cors_mux(config)) as client:
            response = await client.get("/api/data", headers={"Origin": "https://app.test"})
        assert ("access-control-allow-origin", "https://app.test") in response.headers
        assert ("access-control-allow-credentials", "true") in response.headers
        assert ("access-control-expose-headers", "X-Total") in response.headers

    @pytest.mark.anyio
    async def test_default_config_allows_nothing(self) -> None:
        async with TestClient(_make_cors_mux()) as client:
            response = await client.get("/api/data", headers={"Origin": "https://example.com"})
        assert "access-control-allow-origin" not in _header_names(response)


class TestCORSPreflightRequests:
    @pytest.mark.anyio
    async def test_preflight_returns_204_with_allow_lists(self) -> None:
        async with TestClient(_make_cors_mux(CORSConfig(allow_origins=("*",)))) as client:
            response = await client.options(
                "/api/data",
                headers={"Origin": "*", "Access-Control-Request-Method": "GET"},
            )
        assert response.status == 204
        assert response.text == ""
        assert response.header("access-control-allow-origin") == "*"
        assert response.header("access-control-allow-methods") == "GET, POST, PUT, PATCH, DELETE"
        assert response.header("access-control-allow-headers") == (
            "Accept, Content-Type, Content-Length, Accept-Encoding, Authorization, Origin"
        )
        assert response.header("access-control-max-age") == "600"

    @pytest.mark.anyio
    async def test_preflight_disallowed_method(self) -> None:
        config = CORSConfig(allow_origins=("*",), allow_methods=("GET",))
        async with TestClient(_make_cors_mux(config)) as client:
            response = await client.options(
                "/api/data",
                headers={"Origin": "https://a.test", "Access-Control-Request-Method": "DELETE"},
            )
        assert response.status == 204
        assert "access-control-allow-methods" not in _header_names(response)
        assert "access-control-allow-origin" not in _header_names(response)

    @pytest.mark.anyio
    async def test_options_without_request_method_reaches_handler(self) -> None:
        async with TestClient(_make_cors_mux(CORSConfig(allow_origins=("*",)))) as client:
            response = await client.options("/api/data", headers={"Origin": "https://a.test"})
        assert response.status == 200
        assert response.text == '{"message": "hello"}'
