"""Application service (use case) for RoleDefinition operations."""

import logging
from uuid import UUID

from identity_srv.application.converters import (
    EnumConverter,
    RoleDefinitionConverter,
    page_request_to_query_options,
    page_result_to_response,
)
from identity_srv.application.interfaces import RoleAssignmentRepository, RoleDefinitionRepository
from identity_srv.application.schemas.role import (
    PermissionSchema,
    RoleDefinitionCreateRequest,
    RoleDefinitionListResponse,
    RoleDefinitionQueryRequest,
    RoleDefinitionSchema,
    RoleDefinitionUpdateRequest,
)
from identity_srv.application.services.service_support import (
    optional_id,
    require_id,
    require_text,
    translate_errors,
)
from identity_srv.domain.entities import RoleDefinition
from identity_srv.domain.exceptions import (
    ConflictError,
    DuplicateEntityError,
    EntityNotFoundError,
    ErrorCode,
    ForbiddenError,
    InvalidArgumentError,
)

logger = logging.getLogger(__name__)

ROLE_NAME_MIN_LENGTH = 2
ROLE_NAME_MAX_LENGTH = 50


def _validate_name(name: str) -> None:
    if not ROLE_NAME_MIN_LENGTH <= len(name) <= ROLE_NAME_MAX_LENGTH:
        raise InvalidArgumentError(
            f"Role name must be {ROLE_NAME_MIN_LENGTH}-{ROLE_NAME_MAX_LENGTH} characters"
        )


def _validate_permissions(permissions: list[PermissionSchema] | None) -> None:
    for index, permission in enumerate(permissions or []):
        if not (permission.resource or "").strip() or not (permission.action or "").strip():
            raise InvalidArgumentError(f"permissions[{index}] needs a resource and an action")


class RoleDefinitionService:
    """Orchestrates role definition CRUD; system roles are read-only."""

    def __init__(
        self,
        repository: RoleDefinitionRepository,
        assignment_repository: RoleAssignmentRepository,
        converter: RoleDefinitionConverter,
        enum_converter: EnumConverter,
    ):
        self._repository = repository
        self._assignments = assignment_repository
        self._converter = converter
        self._enums = enum_converter

    async def create_role_definition(
        self, request: RoleDefinitionCreateRequest
    ) -> RoleDefinitionSchema:
        name = require_text(request.name, "name")
        _validate_name(name)
        _validate_permissions(request.permissions)
        actor_id = optional_id(request.operator_id, "operator_id")

        with translate_errors("create role definition"):
            if await self._repository.get_by_name(name) is not None:
                raise DuplicateEntityError(
                    "RoleDefinition", "name", name, ErrorCode.ROLE_NAME_EXISTS
                )
            role = self._converter.create_request_to_model(request, actor_id)
            created = await self._repository.create(role)

        logger.info("Created role %s (%s)", created.id, created.name)
        return self._converter.model_to_wire(created)

    async def update_role_definition(
        self, request: RoleDefinitionUpdateRequest
    ) -> RoleDefinitionSchema:
        role_id = require_id(request.role_definition_id, "role_definition_id")
        if request.name is not None:
            _validate_name(request.name.strip())
        _validate_permissions(request.permissions)
        actor_id = optional_id(request.operator_id, "operator_id")

        with translate_errors("update role definition"):
            existing = await self._get_or_raise(role_id)
            if existing.is_system_role:
                raise ForbiddenError(
                    f"System role '{existing.name}' cannot be modified",
                    ErrorCode.SYSTEM_ROLE_IMMUTABLE,
                )
            updated = self._converter.apply_update(existing, request, actor_id)
            if updated.name != existing.name:
                clash = await self._repository.get_by_name(updated.name)
                if clash is not None and clash.id != role_id:
                    raise DuplicateEntityError(
                        "RoleDefinition", "name", updated.name, ErrorCode.ROLE_NAME_EXISTS
                    )
            saved = await self._repository.update(updated)
            saved.user_count = await self._assignments.count_by_role(role_id)

        return self._converter.model_to_wire(saved)

    async def delete_role_definition(self, role_id: str | None) -> None:
        parsed_id = require_id(role_id, "role_definition_id")

        with translate_errors("delete role definition"):
            role = await self._get_or_raise(parsed_id)
            if role.is_system_role:
                raise ForbiddenError(
                    f"System role '{role.name}' cannot be deleted",
                    ErrorCode.SYSTEM_ROLE_IMMUTABLE,
                )
            holders = await self._assignments.count_by_role(parsed_id)
            if holders > 0:
                raise ConflictError(
                    f"Role '{role.name}' is assigned to {holders} user(s)",
                    ErrorCode.ROLE_IN_USE,
                )
            await self._repository.delete(parsed_id)

        logger.info("Deleted role %s", parsed_id)

    async def get_role_definition(self, role_id: str | None) -> RoleDefinitionSchema:
        parsed_id = require_id(role_id, "role_definition_id")
        with translate_errors("get role definition"):
            role = await self._get_or_raise(parsed_id)
            role.user_count = await self._assignments.count_by_role(parsed_id)
        return self._converter.model_to_wire(role)

    async def list_role_definitions(
        self, request: RoleDefinitionQueryRequest
    ) -> RoleDefinitionListResponse:
        status = (
            self._enums.role_status_to_model(request.status)
            if request.status is not None
            else None
        )
        name = request.name.strip() if request.name and request.name.strip() else None
        options = page_request_to_query_options(request.page)

        with translate_errors("list role definitions"):
            roles, page = await self._repository.find(
                options, name=name, status=status, is_system_role=request.is_system_role
            )
            for role in roles:
                role.user_count = await self._assignments.count_by_role(role.id)

        return RoleDefinitionListResponse(
            roles=self._converter.models_to_wire(roles),
            page=page_result_to_response(page),
        )

    async def _get_or_raise(self, role_id: UUID) -> RoleDefinition:
        role = await self._repository.get_by_id(role_id)
        if role is None:
            raise EntityNotFoundError("RoleDefinition", role_id, ErrorCode.ROLE_NOT_FOUND)
        return role
