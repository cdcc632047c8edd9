"""Projection between ``Department`` and its wire records."""

import dataclasses
from uuid import uuid4

from identity_srv.application.converters.identifiers import format_id, parse_id
from identity_srv.application.converters.value_boxing import box_string, unbox_string
from identity_srv.application.schemas.department import (
    CreateDepartmentRequest,
    DepartmentSchema,
    UpdateDepartmentRequest,
)
from identity_srv.domain.entities.common import now_millis
from identity_srv.domain.entities.department import Department


class DepartmentConverter:

    def model_to_wire(self, department: Department | None) -> DepartmentSchema | None:
        if department is None:
            return None
        return DepartmentSchema(
            id=format_id(department.id),
            name=department.name,
            organization_id=format_id(department.organization_id),
            department_type=box_string(department.department_type),
            available_equipment=list(department.available_equipment) or None,
            created_at=department.created_at,
            updated_at=department.updated_at,
        )

    def models_to_wire(self, departments: list[Department] | None) -> list[DepartmentSchema] | None:
        """Empty or absent input yields ``None``."""
        if not departments:
            return None
        return [self.model_to_wire(d) for d in departments]

    def create_request_to_model(self, request: CreateDepartmentRequest) -> Department:
        now = now_millis()
        return Department(
            id=uuid4(),
            name=unbox_string(request.name).strip(),
            organization_id=parse_id(request.organization_id),
            department_type=unbox_string(request.department_type),
            available_equipment=list(request.available_equipment or []),
            created_at=now,
            updated_at=now,
        )

    def apply_update(self, existing: Department, request: UpdateDepartmentRequest) -> Department:
        department = dataclasses.replace(existing)
        if request.name is not None:
            department.name = request.name.strip()
        if request.department_type is not None:
            department.department_type = request.department_type
        if request.available_equipment is not None:
            department.available_equipment = list(request.available_equipment)
        department.updated_at = now_millis()
        return department
