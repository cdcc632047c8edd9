"""HTTP error mapping: every failure comes back as {code, kind, message}."""

from uuid import uuid4

import pytest

from identity_srv.domain.entities import UserProfile
from identity_srv.domain.exceptions import ErrorCode
from identity_srv.infrastructure import dependencies
from identity_srv.main import app


@pytest.mark.asyncio
async def test_not_found_maps_to_404(client):
    response = await client.get(f"/api/v1/users/{uuid4()}")

    assert response.status_code == 404
    body = response.json()
    assert body["code"] == ErrorCode.USER_NOT_FOUND
    assert body["kind"] == "not_found"
    assert "not found" in body["message"]


@pytest.mark.asyncio
async def test_malformed_identifier_maps_to_400(client):
    response = await client.get("/api/v1/organizations/not-a-uuid")

    assert response.status_code == 400
    assert response.json()["kind"] == "invalid_argument"


@pytest.mark.asyncio
async def test_duplicate_maps_to_409(client):
    payload = {"username": "jdoe", "password": "s3cret!"}
    first = await client.post("/api/v1/users", json=payload)
    second = await client.post("/api/v1/users", json=payload)

    assert first.status_code == 201
    assert second.status_code == 409
    assert second.json()["code"] == ErrorCode.USERNAME_ALREADY_EXISTS


@pytest.mark.asyncio
async def test_forbidden_maps_to_403(client, repos):
    admin = await repos.users.create(UserProfile(username="admin", is_system_user=True))

    response = await client.delete(f"/api/v1/users/{admin.id}")

    assert response.status_code == 403
    assert response.json()["code"] == ErrorCode.CANNOT_DELETE_SYSTEM_USER


@pytest.mark.asyncio
async def test_body_validation_errors_map_to_400_with_details(client):
    response = await client.post("/api/v1/users", json=["not", "an", "object"])

    assert response.status_code == 400
    body = response.json()
    assert body["code"] == ErrorCode.INVALID_PARAMS
    assert body["details"]


@pytest.mark.asyncio
async def test_malformed_filter_maps_to_400(client):
    response = await client.get("/api/v1/users", params={"filter": "no-separator"})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_unexpected_errors_do_not_leak(client):
    def broken():
        raise RuntimeError("db password is hunter2")

    app.dependency_overrides[dependencies.get_user_profile_service] = broken

    response = await client.get(f"/api/v1/users/{uuid4()}")

    assert response.status_code == 500
    body = response.json()
    assert body["code"] == ErrorCode.OPERATION_FAILED
    assert "hunter2" not in body["message"]
