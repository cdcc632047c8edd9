"""Application service (use case) for Department operations."""

import logging

from identity_srv.application.converters import (
    DepartmentConverter,
    page_request_to_query_options,
    page_result_to_response,
)
from identity_srv.application.interfaces import (
    DepartmentRepository,
    MembershipRepository,
    OrganizationRepository,
)
from identity_srv.application.schemas.department import (
    CreateDepartmentRequest,
    DepartmentListResponse,
    DepartmentSchema,
    GetOrganizationDepartmentsRequest,
    UpdateDepartmentRequest,
)
from identity_srv.application.services.service_support import (
    require_id,
    require_text,
    translate_errors,
)
from identity_srv.domain.exceptions import (
    ConflictError,
    DuplicateEntityError,
    EntityNotFoundError,
    ErrorCode,
)

logger = logging.getLogger(__name__)


class DepartmentService:
    """Orchestrates department CRUD within an organization."""

    def __init__(
        self,
        repository: DepartmentRepository,
        organization_repository: OrganizationRepository,
        membership_repository: MembershipRepository,
        converter: DepartmentConverter,
    ):
        self._repository = repository
        self._organizations = organization_repository
        self._memberships = membership_repository
        self._converter = converter

    async def create_department(self, request: CreateDepartmentRequest) -> DepartmentSchema:
        name = require_text(request.name, "name")
        organization_id = require_id(request.organization_id, "organization_id")

        with translate_errors("create department"):
            if await self._organizations.get_by_id(organization_id) is None:
                raise EntityNotFoundError(
                    "Organization", organization_id, ErrorCode.ORGANIZATION_NOT_FOUND
                )
            if await self._repository.name_exists(organization_id, name):
                raise DuplicateEntityError(
                    "Department", "name", name, ErrorCode.DEPARTMENT_NAME_EXISTS
                )
            department = self._converter.create_request_to_model(request)
            created = await self._repository.create(department)

        logger.info("Created department %s in organization %s", created.id, organization_id)
        return self._converter.model_to_wire(created)

    async def get_department(self, department_id: str | None) -> DepartmentSchema:
        parsed_id = require_id(department_id, "department_id")
        with translate_errors("get department"):
            department = await self._repository.get_by_id(parsed_id)
        if department is None:
            raise EntityNotFoundError("Department", parsed_id, ErrorCode.DEPARTMENT_NOT_FOUND)
        return self._converter.model_to_wire(department)

    async def update_department(self, request: UpdateDepartmentRequest) -> DepartmentSchema:
        department_id = require_id(request.department_id, "department_id")

        with translate_errors("update department"):
            existing = await self._repository.get_by_id(department_id)
            if existing is None:
                raise EntityNotFoundError(
                    "Department", department_id, ErrorCode.DEPARTMENT_NOT_FOUND
                )
            updated = self._converter.apply_update(existing, request)
            if updated.name != existing.name and await self._repository.name_exists(
                existing.organization_id, updated.name, exclude_id=department_id
            ):
                raise DuplicateEntityError(
                    "Department", "name", updated.name, ErrorCode.DEPARTMENT_NAME_EXISTS
                )
            saved = await self._repository.update(updated)

        return self._converter.model_to_wire(saved)

    async def delete_department(self, department_id: str | None) -> None:
        parsed_id = require_id(department_id, "department_id")

        with translate_errors("delete department"):
            if await self._repository.get_by_id(parsed_id) is None:
                raise EntityNotFoundError("Department", parsed_id, ErrorCode.DEPARTMENT_NOT_FOUND)
            members = await self._memberships.count_by_department(parsed_id)
            if members > 0:
                raise ConflictError(
                    f"Department '{parsed_id}' still has {members} member(s)",
                    ErrorCode.DEPARTMENT_HAS_MEMBERS,
                )
            await self._repository.delete(parsed_id)

        logger.info("Deleted department %s", parsed_id)

    async def get_organization_departments(
        self, request: GetOrganizationDepartmentsRequest
    ) -> DepartmentListResponse:
        organization_id = require_id(request.organization_id, "organization_id")
        options = page_request_to_query_options(request.page)

        with translate_errors("list departments"):
            departments, page = await self._repository.find(
                options, organization_id=organization_id
            )

        return DepartmentListResponse(
            departments=self._converter.models_to_wire(departments) or [],
            page=page_result_to_response(page),
        )
