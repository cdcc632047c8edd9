"""Application service (use case) for assigning roles to users."""

import logging
from uuid import UUID

from identity_srv.application.converters import (
    RoleAssignmentConverter,
    page_request_to_query_options,
    page_result_to_response,
)
from identity_srv.application.interfaces import (
    RoleAssignmentRepository,
    RoleDefinitionRepository,
    UserProfileRepository,
)
from identity_srv.application.schemas.role import (
    AssignRoleToUserRequest,
    BatchBindUsersToRoleRequest,
    BatchBindUsersToRoleResponse,
    BatchGetUserRolesRequest,
    BatchGetUserRolesResponse,
    GetUsersByRoleResponse,
    RevokeRoleFromUserRequest,
    UpdateUserRoleAssignmentRequest,
    UserRoleAssignmentSchema,
    UserRoleListResponse,
    UserRoleQueryRequest,
    UserRolesSchema,
)
from identity_srv.application.services.service_support import (
    optional_id,
    require_id,
    translate_errors,
)
from identity_srv.domain.entities import RoleDefinition, UserProfile, UserRoleAssignment
from identity_srv.domain.exceptions import (
    DuplicateEntityError,
    EntityNotFoundError,
    ErrorCode,
    ForbiddenError,
)

logger = logging.getLogger(__name__)


class RoleAssignmentService:

    def __init__(
        self,
        repository: RoleAssignmentRepository,
        role_repository: RoleDefinitionRepository,
        user_repository: UserProfileRepository,
        converter: RoleAssignmentConverter,
    ):
        self._repository = repository
        self._roles = role_repository
        self._users = user_repository
        self._converter = converter

    async def assign_role_to_user(self, request: AssignRoleToUserRequest) -> UserRoleAssignmentSchema:
        user_id = require_id(request.user_id, "user_id")
        role_id = require_id(request.role_id, "role_id")
        actor_id = optional_id(request.operator_id, "operator_id")

        with translate_errors("assign role"):
            await self._get_user(user_id)
            await self._get_role(role_id)
            if await self._repository.get_by_user_and_role(user_id, role_id) is not None:
                raise DuplicateEntityError(
                    "UserRoleAssignment",
                    "user_id/role_id",
                    f"{user_id}/{role_id}",
                    ErrorCode.ROLE_ALREADY_ASSIGNED,
                )
            assignment = self._converter.create_request_to_model(request, actor_id)
            created = await self._repository.create(assignment)

        logger.info("Assigned role %s to user %s", role_id, user_id)
        return self._converter.model_to_wire(created)

    async def update_user_role_assignment(
        self, request: UpdateUserRoleAssignmentRequest
    ) -> UserRoleAssignmentSchema:
        assignment_id = require_id(request.assignment_id, "assignment_id")
        optional_id(request.user_id, "user_id")
        optional_id(request.role_id, "role_id")
        actor_id = optional_id(request.operator_id, "operator_id")

        with translate_errors("update role assignment"):
            existing = await self._get_assignment(assignment_id)
            updated = self._converter.apply_update(existing, request, actor_id)
            if (updated.user_id, updated.role_id) != (existing.user_id, existing.role_id):
                await self._get_user(updated.user_id)
                await self._get_role(updated.role_id)
                clash = await self._repository.get_by_user_and_role(
                    updated.user_id, updated.role_id
                )
                if clash is not None and clash.id != assignment_id:
                    raise DuplicateEntityError(
                        "UserRoleAssignment",
                        "user_id/role_id",
                        f"{updated.user_id}/{updated.role_id}",
                        ErrorCode.ROLE_ALREADY_ASSIGNED,
                    )
            saved = await self._repository.update(updated)

        return self._converter.model_to_wire(saved)

    async def revoke_role_from_user(self, request: RevokeRoleFromUserRequest) -> None:
        user_id = require_id(request.user_id, "user_id")
        role_id = require_id(request.role_id, "role_id")

        with translate_errors("revoke role"):
            user = await self._get_user(user_id)
            role = await self._get_role(role_id)
            if user.is_system_user and role.is_system_role:
                raise ForbiddenError(
                    "A system role cannot be revoked from a system user",
                    ErrorCode.SYSTEM_ROLE_IMMUTABLE,
                )
            assignment = await self._repository.get_by_user_and_role(user_id, role_id)
            if assignment is None:
                raise EntityNotFoundError(
                    "UserRoleAssignment",
                    f"{user_id}/{role_id}",
                    ErrorCode.ROLE_ASSIGNMENT_NOT_FOUND,
                )
            await self._repository.delete(assignment.id)

        logger.info("Revoked role %s from user %s", role_id, user_id)

    async def get_last_user_role_assignment(self, user_id: str | None) -> UserRoleAssignmentSchema:
        parsed_id = require_id(user_id, "user_id")
        with translate_errors("get last role assignment"):
            assignment = await self._repository.get_last_for_user(parsed_id)
        if assignment is None:
            raise EntityNotFoundError(
                "UserRoleAssignment", parsed_id, ErrorCode.ROLE_ASSIGNMENT_NOT_FOUND
            )
        return self._converter.model_to_wire(assignment)

    async def list_user_role_assignments(self, request: UserRoleQueryRequest) -> UserRoleListResponse:
        user_id = optional_id(request.user_id, "user_id")
        role_id = optional_id(request.role_id, "role_id")
        options = page_request_to_query_options(request.page)

        with translate_errors("list role assignments"):
            assignments, page = await self._repository.find(
                options, user_id=user_id, role_id=role_id
            )

        return UserRoleListResponse(
            assignments=self._converter.models_to_wire(assignments),
            page=page_result_to_response(page),
        )

    async def get_users_by_role(self, role_id: str | None) -> GetUsersByRoleResponse:
        parsed_id = require_id(role_id, "role_id")
        with translate_errors("get users by role"):
            await self._get_role(parsed_id)
            user_ids = await self._repository.list_user_ids_by_role(parsed_id)
        return GetUsersByRoleResponse(
            role_id=str(parsed_id), user_ids=[str(u) for u in user_ids]
        )

    async def batch_bind_users_to_role(
        self, request: BatchBindUsersToRoleRequest
    ) -> BatchBindUsersToRoleResponse:
        """Make the given users the exact set of holders of a role."""
        role_id = require_id(request.role_id, "role_id")
        user_ids = list(
            dict.fromkeys(require_id(u, "user_ids") for u in request.user_ids)
        )
        actor_id = optional_id(request.operator_id, "operator_id")

        with translate_errors("batch bind users to role"):
            await self._get_role(role_id)
            for user_id in user_ids:
                await self._get_user(user_id)
            count = await self._repository.replace_role_users(role_id, user_ids, actor_id)

        logger.info("Role %s now held by %d user(s)", role_id, count)
        return BatchBindUsersToRoleResponse(
            success=True,
            success_count=count,
            message=f"Bound {count} user(s) to role",
        )

    async def batch_get_user_roles(
        self, request: BatchGetUserRolesRequest
    ) -> BatchGetUserRolesResponse:
        user_ids = [require_id(u, "user_ids") for u in request.user_ids]

        with translate_errors("batch get user roles"):
            user_roles = [
                UserRolesSchema(
                    user_id=str(user_id),
                    role_ids=[str(r) for r in await self._repository.list_role_ids_by_user(user_id)],
                )
                for user_id in user_ids
            ]

        return BatchGetUserRolesResponse(user_roles=user_roles)

    # ── Helpers ──────────────────────────────────────────────────────

    async def _get_user(self, user_id: UUID) -> UserProfile:
        user = await self._users.get_by_id(user_id)
        if user is None:
            raise EntityNotFoundError("UserProfile", user_id, ErrorCode.USER_NOT_FOUND)
        return user

    async def _get_role(self, role_id: UUID) -> RoleDefinition:
        role = await self._roles.get_by_id(role_id)
        if role is None:
            raise EntityNotFoundError("RoleDefinition", role_id, ErrorCode.ROLE_NOT_FOUND)
        return role

    async def _get_assignment(self, assignment_id: UUID) -> UserRoleAssignment:
        assignment = await self._repository.get_by_id(assignment_id)
        if assignment is None:
            raise EntityNotFoundError(
                "UserRoleAssignment", assignment_id, ErrorCode.ROLE_ASSIGNMENT_NOT_FOUND
            )
        return assignment
