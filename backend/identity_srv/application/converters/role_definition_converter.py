"""Projection between ``RoleDefinition`` and its wire records."""

import dataclasses
from uuid import UUID, uuid4

from identity_srv.application.converters.enum_converter import EnumConverter
from identity_srv.application.converters.identifiers import format_id
from identity_srv.application.converters.permission_converter import PermissionConverter
from identity_srv.application.converters.value_boxing import box_string, unbox_bool, unbox_string
from identity_srv.application.schemas.role import (
    RoleDefinitionCreateRequest,
    RoleDefinitionSchema,
    RoleDefinitionUpdateRequest,
)
from identity_srv.domain.entities.common import now_millis
from identity_srv.domain.entities.enums import RoleStatus
from identity_srv.domain.entities.role import RoleDefinition


class RoleDefinitionConverter:

    def __init__(self, enum_converter: EnumConverter, permission_converter: PermissionConverter):
        self._enums = enum_converter
        self._permissions = permission_converter

    def model_to_wire(self, role: RoleDefinition | None) -> RoleDefinitionSchema | None:
        """Project a role; the permission list is always emitted empty."""
        if role is None:
            return None
        return RoleDefinitionSchema(
            id=format_id(role.id),
            name=role.name,
            description=box_string(role.description),
            status=self._enums.role_status_to_wire(role.status),
            permissions=[],
            is_system_role=role.is_system_role,
            created_by=format_id(role.created_by),
            updated_by=format_id(role.updated_by),
            created_at=role.created_at,
            updated_at=role.updated_at,
            user_count=role.user_count,
        )

    def models_to_wire(self, roles: list[RoleDefinition] | None) -> list[RoleDefinitionSchema]:
        return [self.model_to_wire(role) for role in roles or []]

    def create_request_to_model(
        self, request: RoleDefinitionCreateRequest, actor_id: UUID | None
    ) -> RoleDefinition:
        now = now_millis()
        status = (
            self._enums.role_status_to_model(request.status)
            if request.status is not None
            else RoleStatus.INACTIVE
        )
        return RoleDefinition(
            id=uuid4(),
            name=unbox_string(request.name).strip(),
            description=unbox_string(request.description),
            status=status,
            permissions=self._permissions.wires_to_models(request.permissions),
            is_system_role=unbox_bool(request.is_system_role),
            created_by=actor_id,
            updated_by=actor_id,
            created_at=now,
            updated_at=now,
        )

    def apply_update(
        self,
        existing: RoleDefinition,
        request: RoleDefinitionUpdateRequest,
        actor_id: UUID | None,
    ) -> RoleDefinition:
        role = dataclasses.replace(existing)
        if request.name is not None:
            role.name = request.name.strip()
        if request.description is not None:
            role.description = request.description
        if request.status is not None:
            role.status = self._enums.role_status_to_model(request.status)
        if request.permissions is not None:
            role.permissions = self._permissions.wires_to_models(request.permissions)
        role.updated_by = actor_id
        role.updated_at = now_millis()
        return role
