"""Trace propagation: call-context values, outbound hook and server middleware.

Persistent values are key/value pairs that travel with every outbound call
as ``x-persist-<key>`` headers and are read back from those headers on the
way in. ``request_id`` and ``trace_id`` are the two keys the service relies
on for log correlation.
"""

import logging
import uuid
from collections.abc import Awaitable, Callable
from contextvars import ContextVar, Token

import httpx
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

PERSIST_HEADER_PREFIX = "x-persist-"
REQUEST_ID_HEADER = "x-request-id"
REQUEST_ID_KEY = "request_id"
TRACE_ID_KEY = "trace_id"

_PERSISTENT: ContextVar[dict[str, str] | None] = ContextVar(
    "identity_persistent_values", default=None
)

OutboundHandler = Callable[[httpx.Request], Awaitable[None]]
OutboundMiddleware = Callable[[OutboundHandler], OutboundHandler]


# ── Call context ─────────────────────────────────────────────────────

def persistent_values() -> dict[str, str]:
    """Snapshot of the values propagated with outbound calls."""
    return dict(_PERSISTENT.get() or {})


def get_persistent_value(key: str) -> str | None:
    return (_PERSISTENT.get() or {}).get(key)


def set_persistent_value(key: str, value: str) -> None:
    values = persistent_values()
    values[key] = value
    _PERSISTENT.set(values)


def bind_persistent_values(values: dict[str, str]) -> Token:
    """Replace the call context; pass the token to ``reset_persistent_values``."""
    return _PERSISTENT.set(dict(values))


def reset_persistent_values(token: Token) -> None:
    _PERSISTENT.reset(token)


def get_request_id() -> str | None:
    return get_persistent_value(REQUEST_ID_KEY)


def get_trace_id() -> str | None:
    return get_persistent_value(TRACE_ID_KEY)


def logging_attrs() -> dict[str, str]:
    """Correlation attributes for log records; ``-`` when outside a request."""
    return {
        REQUEST_ID_KEY: get_request_id() or "-",
        TRACE_ID_KEY: get_trace_id() or "-",
    }


# ── Outbound ─────────────────────────────────────────────────────────

def trace_client_middleware(call_next: OutboundHandler) -> OutboundHandler:
    """Outbound extension point for trace propagation.

    Trace keys already sit in the call context and are written as persistent
    headers by the client, so the handler forwards the request untouched.
    """

    async def handler(request: httpx.Request) -> None:
        await call_next(request)

    return handler


def persistent_headers(values: dict[str, str]) -> dict[str, str]:
    return {f"{PERSIST_HEADER_PREFIX}{key}": value for key, value in values.items()}


def values_from_headers(headers) -> dict[str, str]:
    """Inverse of ``persistent_headers``: collect ``x-persist-*`` headers."""
    values: dict[str, str] = {}
    for name, value in headers.items():
        lowered = name.lower()
        if lowered.startswith(PERSIST_HEADER_PREFIX) and len(lowered) > len(PERSIST_HEADER_PREFIX):
            values[lowered[len(PERSIST_HEADER_PREFIX):]] = value
    return values


# ── Inbound ──────────────────────────────────────────────────────────

class TraceContextMiddleware(BaseHTTPMiddleware):
    """Bind persistent headers to the call context for the duration of a request.

    A missing request id is generated; a missing trace id falls back to the
    request id. The request id is echoed in the ``x-request-id`` response
    header.
    """

    async def dispatch(self, request: Request, call_next):
        values = values_from_headers(request.headers)
        if not values.get(REQUEST_ID_KEY):
            values[REQUEST_ID_KEY] = request.headers.get(REQUEST_ID_HEADER, "")
        if not values[REQUEST_ID_KEY]:
            values[REQUEST_ID_KEY] = str(uuid.uuid4())
            logger.warning(
                "No request id on %s %s; generated %s",
                request.method,
                request.url.path,
                values[REQUEST_ID_KEY],
            )
        if not values.get(TRACE_ID_KEY):
            values[TRACE_ID_KEY] = values[REQUEST_ID_KEY]

        token = bind_persistent_values(values)
        try:
            response = await call_next(request)
        finally:
            reset_persistent_values(token)
        response.headers[REQUEST_ID_HEADER] = values[REQUEST_ID_KEY]
        return response
