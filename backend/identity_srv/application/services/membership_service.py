"""Application service (use case) for user memberships in organizations."""

import logging
from uuid import UUID

from identity_srv.application.converters import (
    MembershipConverter,
    page_request_to_query_options,
    page_result_to_response,
)
from identity_srv.application.interfaces import (
    DepartmentRepository,
    MembershipRepository,
    OrganizationRepository,
    UserProfileRepository,
)
from identity_srv.application.schemas.membership import (
    AddMembershipRequest,
    CheckMembershipRequest,
    CheckMembershipResponse,
    GetUserMembershipsRequest,
    MembershipListResponse,
    UpdateMembershipRequest,
    UserMembershipSchema,
)
from identity_srv.application.services.service_support import (
    optional_id,
    require_id,
    translate_errors,
)
from identity_srv.domain.entities import UserMembership
from identity_srv.domain.exceptions import (
    DuplicateEntityError,
    EntityNotFoundError,
    ErrorCode,
    InvalidArgumentError,
)

logger = logging.getLogger(__name__)


class MembershipService:
    """Orchestrates membership CRUD; a user has at most one primary membership."""

    def __init__(
        self,
        repository: MembershipRepository,
        user_repository: UserProfileRepository,
        organization_repository: OrganizationRepository,
        department_repository: DepartmentRepository,
        converter: MembershipConverter,
    ):
        self._repository = repository
        self._users = user_repository
        self._organizations = organization_repository
        self._departments = department_repository
        self._converter = converter

    async def add_membership(self, request: AddMembershipRequest) -> UserMembershipSchema:
        user_id = require_id(request.user_id, "user_id")
        organization_id = require_id(request.organization_id, "organization_id")
        department_id = optional_id(request.department_id, "department_id")
        actor_id = optional_id(request.operator_id, "operator_id")
        _check_validity_window(request.valid_from, request.valid_to)

        with translate_errors("add membership"):
            if await self._users.get_by_id(user_id) is None:
                raise EntityNotFoundError("UserProfile", user_id, ErrorCode.USER_NOT_FOUND)
            await self._check_placement(organization_id, department_id)
            if await self._repository.find_existing(user_id, organization_id, department_id):
                raise DuplicateEntityError(
                    "UserMembership",
                    "organization_id/department_id",
                    f"{organization_id}/{department_id}",
                    ErrorCode.MEMBERSHIP_ALREADY_EXISTS,
                )
            membership = self._converter.add_request_to_model(request, actor_id)
            if membership.is_primary:
                await self._repository.clear_primary(user_id)
            created = await self._repository.create(membership)

        logger.info("Added user %s to organization %s", user_id, organization_id)
        return self._converter.model_to_wire(created)

    async def update_membership(self, request: UpdateMembershipRequest) -> UserMembershipSchema:
        membership_id = require_id(request.membership_id, "membership_id")
        optional_id(request.organization_id, "organization_id")
        optional_id(request.department_id, "department_id")
        actor_id = optional_id(request.operator_id, "operator_id")

        with translate_errors("update membership"):
            existing = await self._get_or_raise(membership_id)
            updated = self._converter.apply_update(existing, request, actor_id)
            _check_validity_window(updated.valid_from, updated.valid_to)
            if (updated.organization_id, updated.department_id) != (
                existing.organization_id,
                existing.department_id,
            ):
                await self._check_placement(updated.organization_id, updated.department_id)
            if updated.is_primary and not existing.is_primary:
                await self._repository.clear_primary(updated.user_id, exclude_id=membership_id)
            saved = await self._repository.update(updated)

        return self._converter.model_to_wire(saved)

    async def remove_membership(self, membership_id: str | None) -> None:
        parsed_id = require_id(membership_id, "membership_id")
        with translate_errors("remove membership"):
            await self._get_or_raise(parsed_id)
            await self._repository.delete(parsed_id)
        logger.info("Removed membership %s", parsed_id)

    async def get_membership(self, membership_id: str | None) -> UserMembershipSchema:
        parsed_id = require_id(membership_id, "membership_id")
        with translate_errors("get membership"):
            membership = await self._get_or_raise(parsed_id)
        return self._converter.model_to_wire(membership)

    async def get_user_memberships(
        self, request: GetUserMembershipsRequest
    ) -> MembershipListResponse:
        user_id = require_id(request.user_id, "user_id")
        organization_id = optional_id(request.organization_id, "organization_id")
        options = page_request_to_query_options(request.page)

        with translate_errors("list memberships"):
            memberships, page = await self._repository.find(
                options, user_id=user_id, organization_id=organization_id
            )

        return MembershipListResponse(
            memberships=self._converter.models_to_wire(memberships),
            page=page_result_to_response(page),
        )

    async def get_primary_membership(self, user_id: str | None) -> UserMembershipSchema:
        parsed_id = require_id(user_id, "user_id")
        with translate_errors("get primary membership"):
            membership = await self._repository.get_primary(parsed_id)
        if membership is None:
            raise EntityNotFoundError(
                "UserMembership", parsed_id, ErrorCode.PRIMARY_MEMBERSHIP_NOT_FOUND
            )
        return self._converter.model_to_wire(membership)

    async def check_membership(self, request: CheckMembershipRequest) -> CheckMembershipResponse:
        """Whether the user currently belongs to the organization (and department)."""
        user_id = require_id(request.user_id, "user_id")
        organization_id = require_id(request.organization_id, "organization_id")
        department_id = optional_id(request.department_id, "department_id")

        with translate_errors("check membership"):
            memberships = await self._repository.list_by_user(user_id)

        is_member = any(
            m.organization_id == organization_id
            and (department_id is None or m.department_id == department_id)
            and m.is_active()
            for m in memberships
        )
        return CheckMembershipResponse(is_member=is_member)

    # ── Helpers ──────────────────────────────────────────────────────

    async def _get_or_raise(self, membership_id: UUID) -> UserMembership:
        membership = await self._repository.get_by_id(membership_id)
        if membership is None:
            raise EntityNotFoundError(
                "UserMembership", membership_id, ErrorCode.MEMBERSHIP_NOT_FOUND
            )
        return membership

    async def _check_placement(self, organization_id: UUID, department_id: UUID | None) -> None:
        if await self._organizations.get_by_id(organization_id) is None:
            raise EntityNotFoundError(
                "Organization", organization_id, ErrorCode.ORGANIZATION_NOT_FOUND
            )
        if department_id is None:
            return
        department = await self._departments.get_by_id(department_id)
        if department is None:
            raise EntityNotFoundError("Department", department_id, ErrorCode.DEPARTMENT_NOT_FOUND)
        if department.organization_id != organization_id:
            raise InvalidArgumentError(
                f"Department '{department_id}' does not belong to organization '{organization_id}'"
            )


def _check_validity_window(valid_from: int | None, valid_to: int | None) -> None:
    if valid_from is not None and valid_to is not None and valid_to <= valid_from:
        raise InvalidArgumentError("valid_to must be later than valid_from")
