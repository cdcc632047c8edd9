"""Projection between ``UserMembership`` and its wire records.

``model_to_wire`` and ``wire_to_model`` are inverses of each other.
"""

import dataclasses
from uuid import UUID, uuid4

from identity_srv.application.converters.enum_converter import EnumConverter
from identity_srv.application.converters.identifiers import format_id, parse_id
from identity_srv.application.converters.value_boxing import unbox_bool, unbox_int64
from identity_srv.application.schemas.membership import (
    AddMembershipRequest,
    UpdateMembershipRequest,
    UserMembershipSchema,
)
from identity_srv.domain.entities.common import now_millis
from identity_srv.domain.entities.enums import MembershipStatus
from identity_srv.domain.entities.membership import UserMembership


class MembershipConverter:

    def __init__(self, enum_converter: EnumConverter):
        self._enums = enum_converter

    def model_to_wire(self, membership: UserMembership | None) -> UserMembershipSchema | None:
        if membership is None:
            return None
        return UserMembershipSchema(
            id=format_id(membership.id),
            user_id=format_id(membership.user_id),
            organization_id=format_id(membership.organization_id),
            department_id=format_id(membership.department_id),
            status=self._enums.membership_status_to_wire(membership.status),
            is_primary=membership.is_primary,
            valid_from=membership.valid_from,
            valid_to=membership.valid_to,
            created_by=format_id(membership.created_by),
            updated_by=format_id(membership.updated_by),
            created_at=membership.created_at,
            updated_at=membership.updated_at,
        )

    def wire_to_model(self, schema: UserMembershipSchema | None) -> UserMembership | None:
        if schema is None:
            return None
        return UserMembership(
            id=parse_id(schema.id) or uuid4(),
            user_id=parse_id(schema.user_id),
            organization_id=parse_id(schema.organization_id),
            department_id=parse_id(schema.department_id),
            status=self._enums.membership_status_to_model(schema.status),
            is_primary=unbox_bool(schema.is_primary),
            valid_from=schema.valid_from,
            valid_to=schema.valid_to,
            created_by=parse_id(schema.created_by),
            updated_by=parse_id(schema.updated_by),
            created_at=unbox_int64(schema.created_at),
            updated_at=unbox_int64(schema.updated_at),
        )

    def models_to_wire(
        self, memberships: list[UserMembership] | None
    ) -> list[UserMembershipSchema]:
        return [self.model_to_wire(m) for m in memberships or []]

    def add_request_to_model(
        self, request: AddMembershipRequest, actor_id: UUID | None
    ) -> UserMembership:
        now = now_millis()
        return UserMembership(
            id=uuid4(),
            user_id=parse_id(request.user_id),
            organization_id=parse_id(request.organization_id),
            department_id=parse_id(request.department_id),
            status=MembershipStatus.ACTIVE,
            is_primary=unbox_bool(request.is_primary),
            valid_from=request.valid_from,
            valid_to=request.valid_to,
            created_by=actor_id,
            updated_by=actor_id,
            created_at=now,
            updated_at=now,
        )

    def apply_update(
        self,
        existing: UserMembership,
        request: UpdateMembershipRequest,
        actor_id: UUID | None,
    ) -> UserMembership:
        membership = dataclasses.replace(existing)
        organization_id = parse_id(request.organization_id)
        if organization_id is not None:
            membership.organization_id = organization_id
        department_id = parse_id(request.department_id)
        if department_id is not None:
            membership.department_id = department_id
        if request.status is not None:
            membership.status = self._enums.membership_status_to_model(request.status)
        if request.is_primary is not None:
            membership.is_primary = request.is_primary
        if request.valid_from is not None:
            membership.valid_from = request.valid_from
        if request.valid_to is not None:
            membership.valid_to = request.valid_to
        membership.updated_by = actor_id
        membership.updated_at = now_millis()
        return membership
