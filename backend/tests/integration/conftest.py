"""HTTP-level fixtures: the real application with services backed by fakes."""

import os
import tempfile
from pathlib import Path

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Keep uploaded logos out of the working tree; read once by the cached settings.
os.environ.setdefault(
    "LOGO_UPLOAD_DIR", str(Path(tempfile.gettempdir()) / "identity_srv_test_logos")
)

from identity_srv.infrastructure import dependencies  # noqa: E402
from identity_srv.main import app  # noqa: E402


def _provide(service):
    return lambda: service


@pytest.fixture
def fake_services(
    auth_service,
    user_service,
    logo_service,
    organization_service,
    department_service,
    membership_service,
    role_service,
    assignment_service,
    menu_service,
):
    overrides = {
        dependencies.get_authentication_service: auth_service,
        dependencies.get_user_profile_service: user_service,
        dependencies.get_logo_service: logo_service,
        dependencies.get_organization_service: organization_service,
        dependencies.get_department_service: department_service,
        dependencies.get_membership_service: membership_service,
        dependencies.get_role_definition_service: role_service,
        dependencies.get_role_assignment_service: assignment_service,
        dependencies.get_menu_service: menu_service,
    }
    for dependency, service in overrides.items():
        app.dependency_overrides[dependency] = _provide(service)
    yield app
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(fake_services):
    # Unhandled errors come back as 500 responses instead of propagating.
    transport = ASGITransport(app=fake_services, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as http_client:
        yield http_client
