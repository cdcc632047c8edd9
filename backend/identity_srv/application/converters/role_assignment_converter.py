"""Projection between ``UserRoleAssignment`` and its wire records."""

import dataclasses
from uuid import UUID, uuid4

from identity_srv.application.converters.identifiers import format_id, parse_id
from identity_srv.application.schemas.role import (
    AssignRoleToUserRequest,
    UpdateUserRoleAssignmentRequest,
    UserRoleAssignmentSchema,
)
from identity_srv.domain.entities.common import now_millis
from identity_srv.domain.entities.role import UserRoleAssignment


class RoleAssignmentConverter:

    def model_to_wire(
        self, assignment: UserRoleAssignment | None
    ) -> UserRoleAssignmentSchema | None:
        if assignment is None:
            return None
        return UserRoleAssignmentSchema(
            id=format_id(assignment.id),
            user_id=format_id(assignment.user_id),
            role_id=format_id(assignment.role_id),
            created_by=format_id(assignment.created_by),
            updated_by=format_id(assignment.updated_by),
            created_at=assignment.created_at,
            updated_at=assignment.updated_at,
        )

    def models_to_wire(
        self, assignments: list[UserRoleAssignment] | None
    ) -> list[UserRoleAssignmentSchema]:
        return [self.model_to_wire(a) for a in assignments or []]

    def create_request_to_model(
        self, request: AssignRoleToUserRequest, actor_id: UUID | None
    ) -> UserRoleAssignment:
        now = now_millis()
        return UserRoleAssignment(
            id=uuid4(),
            user_id=parse_id(request.user_id),
            role_id=parse_id(request.role_id),
            created_by=actor_id,
            updated_by=actor_id,
            created_at=now,
            updated_at=now,
        )

    def apply_update(
        self,
        existing: UserRoleAssignment,
        request: UpdateUserRoleAssignmentRequest,
        actor_id: UUID | None,
    ) -> UserRoleAssignment:
        assignment = dataclasses.replace(existing)
        user_id = parse_id(request.user_id)
        if user_id is not None:
            assignment.user_id = user_id
        role_id = parse_id(request.role_id)
        if role_id is not None:
            assignment.role_id = role_id
        assignment.updated_by = actor_id
        assignment.updated_at = now_millis()
        return assignment
