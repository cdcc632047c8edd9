"""Application service for navigation menus and role-scoped menu trees."""

import logging
from uuid import UUID

from identity_srv.application.converters import MenuConverter
from identity_srv.application.interfaces import (
    MenuRepository,
    RoleAssignmentRepository,
    RoleDefinitionRepository,
    RoleMenuRepository,
)
from identity_srv.application.schemas.menu import (
    ConfigureRoleMenusRequest,
    MenuTreeResponse,
    RoleMenuTreeResponse,
    UploadMenuRequest,
    UploadMenuResponse,
    UserMenuTreeResponse,
)
from identity_srv.application.services.menu_parser import (
    build_menu_tree,
    filter_menu_tree,
    flatten_menu_tree,
    new_menu_version,
    parse_menu_yaml,
)
from identity_srv.application.services.service_support import require_id, translate_errors
from identity_srv.domain.entities import Menu, RoleDefinition, RoleStatus
from identity_srv.domain.exceptions import EntityNotFoundError, ErrorCode, InvalidArgumentError

logger = logging.getLogger(__name__)


def _collect_ids(nodes: list[Menu], into: set[str]) -> set[str]:
    for node in nodes:
        into.add(node.semantic_id)
        _collect_ids(node.children, into)
    return into


class MenuService:
    """Uploads menu versions and resolves the menus visible to roles and users."""

    def __init__(
        self,
        repository: MenuRepository,
        role_menu_repository: RoleMenuRepository,
        role_repository: RoleDefinitionRepository,
        assignment_repository: RoleAssignmentRepository,
        converter: MenuConverter,
    ):
        self._repository = repository
        self._role_menus = role_menu_repository
        self._roles = role_repository
        self._assignments = assignment_repository
        self._converter = converter

    async def upload_menu(self, request: UploadMenuRequest) -> UploadMenuResponse:
        if request.yaml_content is None or not request.yaml_content.strip():
            raise InvalidArgumentError("yaml_content is required", ErrorCode.MENU_INVALID_CONFIG)
        roots = parse_menu_yaml(request.yaml_content)
        version = new_menu_version()
        flat = flatten_menu_tree(roots, version)

        with translate_errors("upload menu"):
            await self._repository.save_version(flat)

        logger.info("Uploaded menu version %s with %d node(s)", version, len(flat))
        return UploadMenuResponse(version=version, node_count=len(flat))

    async def get_menu_tree(self) -> MenuTreeResponse:
        with translate_errors("get menu tree"):
            tree = await self.load_latest_tree()
        return MenuTreeResponse(menu_tree=self._converter.models_to_wire(tree) or [])

    async def configure_role_menus(self, request: ConfigureRoleMenusRequest) -> RoleMenuTreeResponse:
        role_id = require_id(request.role_id, "role_id")
        menu_ids = list(dict.fromkeys(m.strip() for m in request.menu_ids if m.strip()))

        with translate_errors("configure role menus"):
            role = await self._get_role(role_id)
            tree = await self.load_latest_tree()
            known = _collect_ids(tree, set())
            unknown = [m for m in menu_ids if m not in known]
            if unknown:
                raise InvalidArgumentError(
                    f"Unknown menu id(s): {', '.join(unknown)}", ErrorCode.MENU_NOT_FOUND
                )
            await self._role_menus.set_role_menus(role_id, menu_ids)
            visible = self._visible_for_roles(tree, [role], set(menu_ids))

        logger.info("Configured %d menu(s) for role %s", len(menu_ids), role_id)
        return RoleMenuTreeResponse(
            role_id=str(role_id),
            menu_tree=self._converter.models_to_wire(visible) or [],
        )

    async def get_role_menu_tree(self, role_id: str | None) -> RoleMenuTreeResponse:
        parsed_id = require_id(role_id, "role_id")
        with translate_errors("get role menu tree"):
            role = await self._get_role(parsed_id)
            tree = await self.load_latest_tree()
            granted = set(await self._role_menus.get_role_menus(parsed_id))
            visible = self._visible_for_roles(tree, [role], granted)
        return RoleMenuTreeResponse(
            role_id=str(parsed_id),
            menu_tree=self._converter.models_to_wire(visible) or [],
        )

    async def get_user_menu_tree(self, user_id: str | None) -> UserMenuTreeResponse:
        parsed_id = require_id(user_id, "user_id")
        with translate_errors("get user menu tree"):
            role_ids, tree = await self.menu_tree_for_user(parsed_id)
        return UserMenuTreeResponse(
            user_id=str(parsed_id),
            role_ids=role_ids,
            menu_tree=self._converter.models_to_wire(tree) or [],
        )

    # ── Used by the authentication facade ────────────────────────────

    async def active_roles_for_user(self, user_id: UUID) -> list[RoleDefinition]:
        role_ids = await self._assignments.list_role_ids_by_user(user_id)
        if not role_ids:
            return []
        roles = await self._roles.list_by_ids(role_ids)
        return [role for role in roles if role.status == RoleStatus.ACTIVE]

    async def menu_tree_for_user(self, user_id: UUID) -> tuple[list[str], list[Menu]]:
        """Return the user's active role ids and the menu tree they may see."""
        roles = await self.active_roles_for_user(user_id)
        if not roles:
            return [], []
        tree = await self.load_latest_tree()
        granted: set[str] = set()
        for role in roles:
            granted.update(await self._role_menus.get_role_menus(role.id))
        return [str(role.id) for role in roles], self._visible_for_roles(tree, roles, granted)

    async def load_latest_tree(self) -> list[Menu]:
        version = await self._repository.get_latest_version()
        if version is None:
            return []
        return build_menu_tree(await self._repository.list_by_version(version))

    # ── Helpers ──────────────────────────────────────────────────────

    @staticmethod
    def _visible_for_roles(
        tree: list[Menu], roles: list[RoleDefinition], granted: set[str]
    ) -> list[Menu]:
        if any(role.is_system_role for role in roles):
            return tree
        return filter_menu_tree(tree, granted)

    async def _get_role(self, role_id: UUID) -> RoleDefinition:
        role = await self._roles.get_by_id(role_id)
        if role is None:
            raise EntityNotFoundError("RoleDefinition", role_id, ErrorCode.ROLE_NOT_FOUND)
        return role
