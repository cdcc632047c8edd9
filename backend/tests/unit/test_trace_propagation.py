"""Unit tests for request/trace id propagation in and out of the service."""

import httpx
import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from identity_srv.infrastructure.client.identity_client import IdentityClient, IdentityClientError
from identity_srv.infrastructure.middleware.trace import (
    TraceContextMiddleware,
    bind_persistent_values,
    get_request_id,
    logging_attrs,
    persistent_headers,
    reset_persistent_values,
    set_persistent_value,
    values_from_headers,
)


@pytest.fixture
def traced_app() -> FastAPI:
    app = FastAPI()
    app.add_middleware(TraceContextMiddleware)

    @app.get("/echo")
    async def echo():
        return logging_attrs()

    return app


async def _get(app: FastAPI, headers: dict[str, str] | None = None) -> httpx.Response:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        return await client.get("/echo", headers=headers)


@pytest.mark.asyncio
async def test_persistent_headers_are_bound_for_the_request(traced_app: FastAPI):
    response = await _get(
        traced_app, {"x-persist-request_id": "req-1", "x-persist-trace_id": "trace-9"}
    )

    assert response.json() == {"request_id": "req-1", "trace_id": "trace-9"}
    assert response.headers["x-request-id"] == "req-1"


@pytest.mark.asyncio
async def test_plain_request_id_header_is_accepted(traced_app: FastAPI):
    response = await _get(traced_app, {"x-request-id": "req-2"})
    assert response.json() == {"request_id": "req-2", "trace_id": "req-2"}


@pytest.mark.asyncio
async def test_missing_request_id_is_generated(traced_app: FastAPI):
    response = await _get(traced_app)

    body = response.json()
    assert body["request_id"] not in ("", "-")
    assert body["trace_id"] == body["request_id"]
    assert response.headers["x-request-id"] == body["request_id"]


def test_context_is_empty_outside_requests():
    assert logging_attrs() == {"request_id": "-", "trace_id": "-"}


def test_bound_values_are_restored_on_reset():
    token = bind_persistent_values({"request_id": "outer"})
    try:
        set_persistent_value("tenant", "acme")
        assert get_request_id() == "outer"
    finally:
        reset_persistent_values(token)
    assert get_request_id() is None


def test_header_codec():
    headers = persistent_headers({"request_id": "r", "tenant": "acme"})
    assert headers == {"x-persist-request_id": "r", "x-persist-tenant": "acme"}
    assert values_from_headers({**headers, "X-Persist-": "ignored", "accept": "*/*"}) == {
        "request_id": "r",
        "tenant": "acme",
    }


def _client_for(handler) -> IdentityClient:
    http_client = httpx.AsyncClient(
        base_url="http://identity", transport=httpx.MockTransport(handler)
    )
    return IdentityClient("http://identity", http_client=http_client)


@pytest.mark.asyncio
async def test_client_forwards_call_context_as_headers():
    seen: dict[str, str] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen.update(request.headers)
        return httpx.Response(200, json={"status": "healthy"})

    token = bind_persistent_values({"request_id": "req-7", "trace_id": "trace-7"})
    try:
        async with _client_for(handler) as client:
            body = await client.health()
    finally:
        reset_persistent_values(token)

    assert body == {"status": "healthy"}
    assert seen["x-persist-request_id"] == "req-7"
    assert seen["x-persist-trace_id"] == "trace-7"


@pytest.mark.asyncio
async def test_client_runs_custom_middlewares_in_order():
    calls: list[str] = []

    def tagging(name):
        def middleware(call_next):
            async def handle(request: httpx.Request) -> None:
                calls.append(name)
                request.headers["x-persist-" + name] = "1"
                await call_next(request)

            return handle

        return middleware

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(204)

    http_client = httpx.AsyncClient(base_url="http://identity", transport=httpx.MockTransport(handler))
    client = IdentityClient(
        "http://identity", http_client=http_client, middlewares=[tagging("a"), tagging("b")]
    )
    try:
        assert await client.request("DELETE", "/api/v1/users/x") is None
    finally:
        await client.aclose()

    assert calls == ["a", "b"]


@pytest.mark.asyncio
async def test_client_raises_service_errors():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            404, json={"code": 201001, "kind": "not_found", "message": "UserProfile not found"}
        )

    async with _client_for(handler) as client:
        with pytest.raises(IdentityClientError) as exc_info:
            await client.get_user("00000000-0000-0000-0000-000000000000")

    assert exc_info.value.status_code == 404
    assert exc_info.value.code == 201001
    assert exc_info.value.kind == "not_found"


@pytest.mark.asyncio
async def test_injected_client_targets_the_given_base_url():
    seen: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        return httpx.Response(200, json={"status": "healthy"})

    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    async with IdentityClient("http://identity.internal:8020/", http_client=http_client) as client:
        await client.health()

    assert seen == ["http://identity.internal:8020/api/v1/health"]
