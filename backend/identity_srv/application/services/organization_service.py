"""Application service (use case) for Organization operations."""

import logging
from uuid import UUID

from identity_srv.application.converters import (
    OrganizationConverter,
    page_request_to_query_options,
    page_result_to_response,
)
from identity_srv.application.interfaces import (
    DepartmentRepository,
    MembershipRepository,
    OrganizationRepository,
)
from identity_srv.application.schemas.organization import (
    CreateOrganizationRequest,
    ListOrganizationsRequest,
    OrganizationListResponse,
    OrganizationSchema,
    UpdateOrganizationRequest,
)
from identity_srv.application.services.logo_service import LogoService
from identity_srv.application.services.service_support import (
    optional_id,
    require_id,
    require_text,
    translate_errors,
)
from identity_srv.domain.entities import Organization, generate_organization_code
from identity_srv.domain.exceptions import (
    ConflictError,
    DuplicateEntityError,
    EntityNotFoundError,
    ErrorCode,
    InvalidArgumentError,
)

logger = logging.getLogger(__name__)

_MAX_CODE_SUFFIX = 99


class OrganizationService:
    """Orchestrates organization CRUD, the two-level hierarchy and logo binding."""

    def __init__(
        self,
        repository: OrganizationRepository,
        department_repository: DepartmentRepository,
        membership_repository: MembershipRepository,
        logo_service: LogoService,
        converter: OrganizationConverter,
    ):
        self._repository = repository
        self._departments = department_repository
        self._memberships = membership_repository
        self._logos = logo_service
        self._converter = converter

    async def create_organization(self, request: CreateOrganizationRequest) -> OrganizationSchema:
        require_text(request.name, "name")
        parent_id = optional_id(request.parent_id, "parent_id")
        logo_id = optional_id(request.logo_id, "logo_id")
        organization = self._converter.create_request_to_model(request)

        with translate_errors("create organization"):
            if parent_id is not None:
                await self._check_parent(parent_id)
            organization.code = await self._resolve_code(organization)
            created = await self._repository.create(organization)
            if logo_id is not None:
                await self._logos.bind(logo_id, created.id)

        logger.info("Created organization %s (%s)", created.id, created.code)
        return await self._to_wire(created)

    async def get_organization(self, organization_id: str | None) -> OrganizationSchema:
        parsed_id = require_id(organization_id, "organization_id")
        with translate_errors("get organization"):
            organization = await self._get_or_raise(parsed_id)
            return await self._to_wire(organization)

    async def update_organization(self, request: UpdateOrganizationRequest) -> OrganizationSchema:
        organization_id = require_id(request.organization_id, "organization_id")
        new_parent_id = optional_id(request.parent_id, "parent_id")
        logo_id = optional_id(request.logo_id, "logo_id")

        with translate_errors("update organization"):
            existing = await self._get_or_raise(organization_id)
            updated = self._converter.apply_update(existing, request)
            if new_parent_id is not None and new_parent_id != existing.parent_id:
                if new_parent_id == organization_id:
                    raise InvalidArgumentError(
                        "An organization cannot be its own parent",
                        ErrorCode.INVALID_ORGANIZATION_HIERARCHY,
                    )
                await self._check_parent(new_parent_id)
                if await self._repository.count_children(organization_id) > 0:
                    raise InvalidArgumentError(
                        "Organizations with children cannot be nested",
                        ErrorCode.INVALID_ORGANIZATION_HIERARCHY,
                    )
            saved = await self._repository.update(updated)
            if logo_id is not None:
                await self._logos.bind(logo_id, organization_id)
            return await self._to_wire(saved)

    async def delete_organization(self, organization_id: str | None) -> None:
        parsed_id = require_id(organization_id, "organization_id")

        with translate_errors("delete organization"):
            await self._get_or_raise(parsed_id)
            if await self._repository.count_children(parsed_id) > 0:
                raise ConflictError(
                    f"Organization '{parsed_id}' has child organizations",
                    ErrorCode.ORGANIZATION_HAS_CHILDREN,
                )
            if await self._departments.count_by_organization(parsed_id) > 0:
                raise ConflictError(
                    f"Organization '{parsed_id}' still has departments",
                    ErrorCode.ORGANIZATION_HAS_DEPARTMENTS,
                )
            if await self._memberships.count_by_organization(parsed_id) > 0:
                raise ConflictError(
                    f"Organization '{parsed_id}' still has members",
                    ErrorCode.ORGANIZATION_HAS_MEMBERS,
                )
            await self._logos.release_organization_logo(parsed_id)
            await self._repository.delete(parsed_id)

        logger.info("Deleted organization %s", parsed_id)

    async def list_organizations(self, request: ListOrganizationsRequest) -> OrganizationListResponse:
        parent_id = optional_id(request.parent_id, "parent_id")
        options = page_request_to_query_options(request.page)

        with translate_errors("list organizations"):
            organizations, page = await self._repository.find(options, parent_id=parent_id)
            items = [await self._to_wire(org) for org in organizations]

        return OrganizationListResponse(
            organizations=items,
            page=page_result_to_response(page),
        )

    # ── Helpers ──────────────────────────────────────────────────────

    async def _get_or_raise(self, organization_id: UUID) -> Organization:
        organization = await self._repository.get_by_id(organization_id)
        if organization is None:
            raise EntityNotFoundError(
                "Organization", organization_id, ErrorCode.ORGANIZATION_NOT_FOUND
            )
        return organization

    async def _check_parent(self, parent_id: UUID) -> None:
        parent = await self._repository.get_by_id(parent_id)
        if parent is None:
            raise EntityNotFoundError(
                "Organization", parent_id, ErrorCode.PARENT_ORGANIZATION_NOT_FOUND
            )
        if parent.parent_id is not None:
            raise InvalidArgumentError(
                "Organizations may only be nested one level deep",
                ErrorCode.INVALID_ORGANIZATION_HIERARCHY,
            )

    async def _resolve_code(self, organization: Organization) -> str:
        """Use the requested code, or derive a free one from the name."""
        if organization.code:
            if await self._repository.get_by_code(organization.code) is not None:
                raise DuplicateEntityError(
                    "Organization", "code", organization.code, ErrorCode.ORGANIZATION_CODE_EXISTS
                )
            return organization.code

        base = generate_organization_code(organization.name)
        if await self._repository.get_by_code(base) is None:
            return base
        for suffix in range(1, _MAX_CODE_SUFFIX + 1):
            candidate = f"{base[:6]}{suffix:02d}"
            if await self._repository.get_by_code(candidate) is None:
                return candidate
        raise DuplicateEntityError(
            "Organization", "code", base, ErrorCode.ORGANIZATION_CODE_EXISTS
        )

    async def _to_wire(self, organization: Organization) -> OrganizationSchema:
        logo_url, logo_id = await self._logos.logo_reference(organization.id)
        return self._converter.model_to_wire(organization, logo_url=logo_url, logo_id=logo_id)
