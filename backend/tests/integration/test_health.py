"""Tests for the health check endpoint."""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from identity_srv.infrastructure.database.session import get_db_session
from identity_srv.main import app


class _UnreachableSession:
    async def execute(self, statement):
        raise ConnectionRefusedError("connection refused")

    async def rollback(self):
        return None


@pytest_asyncio.fixture
async def sqlite_session_override():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async def session_override():
        async with factory() as session:
            yield session

    app.dependency_overrides[get_db_session] = session_override
    yield
    app.dependency_overrides.clear()
    await engine.dispose()


async def _get_health():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        return await client.get("/api/v1/health")


@pytest.mark.asyncio
async def test_health_check_returns_200(sqlite_session_override):
    """Health endpoint should return 200 with status, version, and environment."""
    response = await _get_health()

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["database"] == "ok"
    assert "version" in data
    assert "environment" in data
    assert response.headers["x-request-id"]


@pytest.mark.asyncio
async def test_health_check_reports_unreachable_database():
    app.dependency_overrides[get_db_session] = lambda: _UnreachableSession()
    try:
        response = await _get_health()
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 503
    data = response.json()
    assert data["status"] == "degraded"
    assert data["database"] == "unavailable"
