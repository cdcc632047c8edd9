"""Projection between ``Organization`` and its wire records."""

import dataclasses
from uuid import uuid4

from identity_srv.application.converters.identifiers import format_id, parse_id
from identity_srv.application.converters.value_boxing import box_string, unbox_string
from identity_srv.application.schemas.organization import (
    CreateOrganizationRequest,
    OrganizationSchema,
    UpdateOrganizationRequest,
)
from identity_srv.domain.entities.common import now_millis
from identity_srv.domain.entities.organization import Organization


class OrganizationConverter:

    def model_to_wire(
        self,
        organization: Organization | None,
        logo_url: str | None = None,
        logo_id: str | None = None,
    ) -> OrganizationSchema | None:
        """Project an organization; logo details are attached by the caller."""
        if organization is None:
            return None
        return OrganizationSchema(
            id=format_id(organization.id),
            code=box_string(organization.code),
            name=box_string(organization.name),
            parent_id=format_id(organization.parent_id),
            facility_type=box_string(organization.facility_type),
            accreditation_status=box_string(organization.accreditation_status),
            province_city=list(organization.province_city) or None,
            logo=logo_url,
            logo_id=logo_id,
            created_at=organization.created_at,
            updated_at=organization.updated_at,
        )

    def models_to_wire(self, organizations: list[Organization] | None) -> list[OrganizationSchema]:
        return [self.model_to_wire(org) for org in organizations or []]

    def create_request_to_model(self, request: CreateOrganizationRequest) -> Organization:
        now = now_millis()
        return Organization(
            id=uuid4(),
            name=unbox_string(request.name).strip(),
            code=unbox_string(request.code).strip(),
            parent_id=parse_id(request.parent_id),
            facility_type=unbox_string(request.facility_type),
            accreditation_status=unbox_string(request.accreditation_status),
            province_city=list(request.province_city or []),
            created_at=now,
            updated_at=now,
        )

    def apply_update(
        self, existing: Organization, request: UpdateOrganizationRequest
    ) -> Organization:
        organization = dataclasses.replace(existing)
        if request.name is not None:
            organization.name = request.name.strip()
        if request.parent_id is not None:
            organization.parent_id = parse_id(request.parent_id)
        if request.facility_type is not None:
            organization.facility_type = request.facility_type
        if request.accreditation_status is not None:
            organization.accreditation_status = request.accreditation_status
        if request.province_city is not None:
            organization.province_city = list(request.province_city)
        organization.updated_at = now_millis()
        return organization
