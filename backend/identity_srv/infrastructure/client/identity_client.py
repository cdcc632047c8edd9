"""Async HTTP client for calling the identity service from other services.

Every outbound request carries the caller's persistent values as
``x-persist-<key>`` headers, so request and trace ids follow the call chain.
"""

import logging
from typing import Any

import httpx

from identity_srv.infrastructure.middleware.trace import (
    OutboundHandler,
    OutboundMiddleware,
    persistent_headers,
    persistent_values,
    trace_client_middleware,
)

logger = logging.getLogger(__name__)


class IdentityClientError(Exception):
    """Error response returned by the identity service."""

    def __init__(self, status_code: int, code: int | None, kind: str | None, message: str):
        self.status_code = status_code
        self.code = code
        self.kind = kind
        self.message = message
        super().__init__(f"[{status_code}] {message}")


async def _write_persistent_headers(request: httpx.Request) -> None:
    for name, value in persistent_headers(persistent_values()).items():
        request.headers.setdefault(name, value)


class IdentityClient:
    """Thin wrapper around ``httpx.AsyncClient`` for the ``/api/v1`` surface."""

    def __init__(
        self,
        base_url: str,
        *,
        middlewares: list[OutboundMiddleware] | None = None,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 10.0,
    ):
        self._middlewares = middlewares if middlewares is not None else [trace_client_middleware]
        # An injected client keeps its transport and timeouts but targets base_url.
        if http_client is None:
            http_client = httpx.AsyncClient(timeout=timeout)
        http_client.base_url = base_url.rstrip("/")
        self._http_client = http_client
        self._http_client.event_hooks["request"].append(self._on_request)

    async def _on_request(self, request: httpx.Request) -> None:
        handler: OutboundHandler = _write_persistent_headers
        for middleware in reversed(self._middlewares):
            handler = middleware(handler)
        await handler(request)

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        response = await self._http_client.request(method, path, json=json, params=params)
        if response.is_error:
            self._raise_for_error(response)
        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    @staticmethod
    def _raise_for_error(response: httpx.Response) -> None:
        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}
        logger.warning(
            "Identity service returned %d for %s %s",
            response.status_code,
            response.request.method,
            response.request.url.path,
        )
        raise IdentityClientError(
            response.status_code,
            body.get("code"),
            body.get("kind"),
            body.get("message") or response.reason_phrase,
        )

    # ── Convenience calls ───────────────────────────────────────────

    async def health(self) -> dict:
        return await self.request("GET", "/api/v1/health")

    async def login(self, username: str, password: str) -> dict:
        return await self.request(
            "POST", "/api/v1/auth/login", json={"username": username, "password": password}
        )

    async def get_user(self, user_id: str) -> dict:
        return await self.request("GET", f"/api/v1/users/{user_id}")

    async def get_user_menu_tree(self, user_id: str) -> dict:
        return await self.request("GET", f"/api/v1/menus/users/{user_id}")

    async def aclose(self) -> None:
        await self._http_client.aclose()

    async def __aenter__(self) -> "IdentityClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
