"""Unit tests for the MenuService."""

from uuid import uuid4

import pytest

from identity_srv.application.schemas.menu import ConfigureRoleMenusRequest, UploadMenuRequest
from identity_srv.application.services import MenuService
from identity_srv.domain.entities import RoleDefinition, RoleStatus, UserProfile, UserRoleAssignment
from identity_srv.domain.exceptions import EntityNotFoundError, ErrorCode, InvalidArgumentError

MENU_YAML = """
menu:
  - name: Dashboard
    id: dashboard
    path: /dashboard
    children:
      - name: Reports
        id: dashboard.reports
        path: /dashboard/reports
  - name: Settings
    id: settings
    path: /settings
"""


def _ids(nodes):
    return [(n.id, _ids(n.children or [])) for n in nodes]


@pytest.mark.asyncio
async def test_upload_then_read_tree(menu_service: MenuService):
    uploaded = await menu_service.upload_menu(UploadMenuRequest(yaml_content=MENU_YAML))
    tree = await menu_service.get_menu_tree()

    assert uploaded.node_count == 3
    assert uploaded.version.startswith("v")
    assert _ids(tree.menu_tree) == [("dashboard", [("dashboard.reports", [])]), ("settings", [])]


@pytest.mark.asyncio
async def test_tree_is_empty_before_any_upload(menu_service: MenuService):
    assert (await menu_service.get_menu_tree()).menu_tree == []


@pytest.mark.asyncio
async def test_upload_requires_content(menu_service: MenuService):
    with pytest.raises(InvalidArgumentError) as exc_info:
        await menu_service.upload_menu(UploadMenuRequest(yaml_content="  "))
    assert exc_info.value.code == ErrorCode.MENU_INVALID_CONFIG


@pytest.mark.asyncio
async def test_configure_role_menus_returns_filtered_tree(menu_service: MenuService, repos):
    await menu_service.upload_menu(UploadMenuRequest(yaml_content=MENU_YAML))
    role = await repos.roles.create(RoleDefinition(name="nurse", status=RoleStatus.ACTIVE))

    configured = await menu_service.configure_role_menus(
        ConfigureRoleMenusRequest(role_id=str(role.id), menu_ids=["dashboard.reports", " "])
    )
    fetched = await menu_service.get_role_menu_tree(str(role.id))

    assert _ids(configured.menu_tree) == [("dashboard", [("dashboard.reports", [])])]
    assert fetched.menu_tree == configured.menu_tree
    assert await repos.role_menus.get_role_menus(role.id) == ["dashboard.reports"]


@pytest.mark.asyncio
async def test_configure_rejects_unknown_menu_ids(menu_service: MenuService, repos):
    await menu_service.upload_menu(UploadMenuRequest(yaml_content=MENU_YAML))
    role = await repos.roles.create(RoleDefinition(name="nurse"))

    with pytest.raises(InvalidArgumentError) as exc_info:
        await menu_service.configure_role_menus(
            ConfigureRoleMenusRequest(role_id=str(role.id), menu_ids=["nowhere"])
        )
    assert exc_info.value.code == ErrorCode.MENU_NOT_FOUND


@pytest.mark.asyncio
async def test_role_menu_tree_for_unknown_role(menu_service: MenuService):
    with pytest.raises(EntityNotFoundError) as exc_info:
        await menu_service.get_role_menu_tree(str(uuid4()))
    assert exc_info.value.code == ErrorCode.ROLE_NOT_FOUND


@pytest.mark.asyncio
async def test_system_role_sees_whole_tree(menu_service: MenuService, repos):
    await menu_service.upload_menu(UploadMenuRequest(yaml_content=MENU_YAML))
    role = await repos.roles.create(
        RoleDefinition(name="admin", status=RoleStatus.ACTIVE, is_system_role=True)
    )

    tree = await menu_service.get_role_menu_tree(str(role.id))

    assert len(tree.menu_tree) == 2


@pytest.mark.asyncio
async def test_user_menu_tree_merges_active_roles(menu_service: MenuService, repos):
    await menu_service.upload_menu(UploadMenuRequest(yaml_content=MENU_YAML))
    user = await repos.users.create(UserProfile(username="jdoe"))
    nurse = await repos.roles.create(RoleDefinition(name="nurse", status=RoleStatus.ACTIVE))
    clerk = await repos.roles.create(RoleDefinition(name="clerk", status=RoleStatus.ACTIVE))
    retired = await repos.roles.create(RoleDefinition(name="old", status=RoleStatus.DEPRECATED))
    for role, menus in ((nurse, ["dashboard.reports"]), (clerk, ["settings"]), (retired, ["dashboard"])):
        await repos.assignments.create(UserRoleAssignment(user_id=user.id, role_id=role.id))
        await repos.role_menus.set_role_menus(role.id, menus)

    result = await menu_service.get_user_menu_tree(str(user.id))

    assert sorted(result.role_ids) == sorted([str(nurse.id), str(clerk.id)])
    assert _ids(result.menu_tree) == [("dashboard", [("dashboard.reports", [])]), ("settings", [])]


@pytest.mark.asyncio
async def test_latest_upload_wins(menu_service: MenuService, monkeypatch):
    versions = iter(["v1", "v2"])
    monkeypatch.setattr(
        "identity_srv.application.services.menu_service.new_menu_version", lambda: next(versions)
    )
    await menu_service.upload_menu(UploadMenuRequest(yaml_content=MENU_YAML))
    uploaded = await menu_service.upload_menu(
        UploadMenuRequest(yaml_content="menu:\n  - name: Only\n    id: only\n    path: /only\n")
    )

    tree = await menu_service.get_menu_tree()

    assert uploaded.version == "v2"
    assert _ids(tree.menu_tree) == [("only", [])]
