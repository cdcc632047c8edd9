"""Concrete repository implementations for organizations and their logos."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from identity_srv.application.interfaces import (
    OrganizationLogoRepository,
    OrganizationRepository,
)
from identity_srv.domain.entities import (
    LogoStatus,
    Organization,
    OrganizationLogo,
    PageResult,
    QueryOptions,
)
from identity_srv.infrastructure.database.models import OrganizationLogoModel, OrganizationModel
from identity_srv.infrastructure.database.repositories.query import (
    apply_query_options,
    count_where,
    flush_or_conflict,
)


class SQLAlchemyOrganizationRepository(OrganizationRepository):
    """Implements the OrganizationRepository port using SQLAlchemy async sessions."""

    _FILTER_COLUMNS = {
        "code": OrganizationModel.code,
        "name": OrganizationModel.name,
        "facility_type": OrganizationModel.facility_type,
        "accreditation_status": OrganizationModel.accreditation_status,
        "created_at": OrganizationModel.created_at,
        "updated_at": OrganizationModel.updated_at,
    }
    _SEARCH_COLUMNS = [OrganizationModel.name, OrganizationModel.code]

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: OrganizationModel) -> Organization:
        return Organization(
            id=model.id,
            name=model.name,
            code=model.code,
            parent_id=model.parent_id,
            facility_type=model.facility_type,
            accreditation_status=model.accreditation_status,
            province_city=list(model.province_city or []),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    @staticmethod
    def _values(entity: Organization) -> dict:
        return {
            "name": entity.name,
            "code": entity.code,
            "parent_id": entity.parent_id,
            "facility_type": entity.facility_type,
            "accreditation_status": entity.accreditation_status,
            "province_city": list(entity.province_city),
            "created_at": entity.created_at,
            "updated_at": entity.updated_at,
        }

    async def get_by_id(self, organization_id: UUID) -> Organization | None:
        result = await self._session.get(OrganizationModel, organization_id)
        return self._to_entity(result) if result else None

    async def get_by_code(self, code: str) -> Organization | None:
        stmt = select(OrganizationModel).where(OrganizationModel.code == code)
        model = (await self._session.execute(stmt)).scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def create(self, organization: Organization) -> Organization:
        model = OrganizationModel(id=organization.id, **self._values(organization))
        self._session.add(model)
        await flush_or_conflict(self._session, "Organization")
        return self._to_entity(model)

    async def update(self, organization: Organization) -> Organization:
        model = await self._session.get(OrganizationModel, organization.id)
        if model is None:
            raise ValueError(f"Organization {organization.id} not found in database")
        for key, value in self._values(organization).items():
            setattr(model, key, value)
        await flush_or_conflict(self._session, "Organization")
        return self._to_entity(model)

    async def delete(self, organization_id: UUID) -> bool:
        model = await self._session.get(OrganizationModel, organization_id)
        if model is None:
            return False
        await self._session.delete(model)
        await self._session.flush()
        return True

    async def find(
        self, options: QueryOptions, *, parent_id: UUID | None = None
    ) -> tuple[list[Organization], PageResult]:
        stmt = select(OrganizationModel)
        if parent_id is not None:
            stmt = stmt.where(OrganizationModel.parent_id == parent_id)
        rows, page = await apply_query_options(
            self._session,
            stmt,
            OrganizationModel,
            options,
            filter_columns=self._FILTER_COLUMNS,
            search_columns=self._SEARCH_COLUMNS,
        )
        return [self._to_entity(row) for row in rows], page

    async def count_children(self, organization_id: UUID) -> int:
        return await count_where(
            self._session, OrganizationModel, OrganizationModel.parent_id == organization_id
        )


class SQLAlchemyOrganizationLogoRepository(OrganizationLogoRepository):
    """Implements the OrganizationLogoRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: OrganizationLogoModel) -> OrganizationLogo:
        return OrganizationLogo(
            id=model.id,
            file_id=model.file_id,
            file_name=model.file_name,
            file_size=model.file_size,
            mime_type=model.mime_type,
            status=LogoStatus(model.status),
            bound_organization_id=model.bound_organization_id,
            expires_at=model.expires_at,
            uploaded_by=model.uploaded_by,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    @staticmethod
    def _values(entity: OrganizationLogo) -> dict:
        return {
            "file_id": entity.file_id,
            "file_name": entity.file_name,
            "file_size": entity.file_size,
            "mime_type": entity.mime_type,
            "status": int(entity.status),
            "bound_organization_id": entity.bound_organization_id,
            "expires_at": entity.expires_at,
            "uploaded_by": entity.uploaded_by,
            "created_at": entity.created_at,
            "updated_at": entity.updated_at,
        }

    async def get_by_id(self, logo_id: UUID) -> OrganizationLogo | None:
        result = await self._session.get(OrganizationLogoModel, logo_id)
        return self._to_entity(result) if result else None

    async def get_bound_to_organization(self, organization_id: UUID) -> OrganizationLogo | None:
        stmt = (
            select(OrganizationLogoModel)
            .where(
                OrganizationLogoModel.bound_organization_id == organization_id,
                OrganizationLogoModel.status == int(LogoStatus.BOUND),
            )
            .order_by(OrganizationLogoModel.updated_at.desc())
            .limit(1)
        )
        model = (await self._session.execute(stmt)).scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def create(self, logo: OrganizationLogo) -> OrganizationLogo:
        model = OrganizationLogoModel(id=logo.id, **self._values(logo))
        self._session.add(model)
        await flush_or_conflict(self._session, "OrganizationLogo")
        return self._to_entity(model)

    async def update(self, logo: OrganizationLogo) -> OrganizationLogo:
        model = await self._session.get(OrganizationLogoModel, logo.id)
        if model is None:
            raise ValueError(f"OrganizationLogo {logo.id} not found in database")
        for key, value in self._values(logo).items():
            setattr(model, key, value)
        await self._session.flush()
        return self._to_entity(model)
