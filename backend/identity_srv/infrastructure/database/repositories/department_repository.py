"""Concrete repository implementation for Department backed by SQLAlchemy."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from identity_srv.application.converters.value_boxing import (
    decode_string_list,
    encode_string_list,
)
from identity_srv.application.interfaces import DepartmentRepository
from identity_srv.domain.entities import Department, PageResult, QueryOptions
from identity_srv.infrastructure.database.models import DepartmentModel
from identity_srv.infrastructure.database.repositories.query import (
    apply_query_options,
    count_where,
    flush_or_conflict,
)


class SQLAlchemyDepartmentRepository(DepartmentRepository):
    """Implements the DepartmentRepository port using SQLAlchemy async sessions."""

    _FILTER_COLUMNS = {
        "name": DepartmentModel.name,
        "department_type": DepartmentModel.department_type,
        "created_at": DepartmentModel.created_at,
        "updated_at": DepartmentModel.updated_at,
    }
    _SEARCH_COLUMNS = [DepartmentModel.name, DepartmentModel.department_type]

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: DepartmentModel) -> Department:
        return Department(
            id=model.id,
            name=model.name,
            organization_id=model.organization_id,
            department_type=model.department_type,
            available_equipment=decode_string_list(model.available_equipment) or [],
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    @staticmethod
    def _values(entity: Department) -> dict:
        return {
            "name": entity.name,
            "organization_id": entity.organization_id,
            "department_type": entity.department_type,
            "available_equipment": encode_string_list(entity.available_equipment),
            "created_at": entity.created_at,
            "updated_at": entity.updated_at,
        }

    async def get_by_id(self, department_id: UUID) -> Department | None:
        result = await self._session.get(DepartmentModel, department_id)
        return self._to_entity(result) if result else None

    async def create(self, department: Department) -> Department:
        model = DepartmentModel(id=department.id, **self._values(department))
        self._session.add(model)
        await flush_or_conflict(self._session, "Department")
        return self._to_entity(model)

    async def update(self, department: Department) -> Department:
        model = await self._session.get(DepartmentModel, department.id)
        if model is None:
            raise ValueError(f"Department {department.id} not found in database")
        for key, value in self._values(department).items():
            setattr(model, key, value)
        await flush_or_conflict(self._session, "Department")
        return self._to_entity(model)

    async def delete(self, department_id: UUID) -> bool:
        model = await self._session.get(DepartmentModel, department_id)
        if model is None:
            return False
        await self._session.delete(model)
        await self._session.flush()
        return True

    async def find(
        self, options: QueryOptions, *, organization_id: UUID | None = None
    ) -> tuple[list[Department], PageResult]:
        stmt = select(DepartmentModel)
        if organization_id is not None:
            stmt = stmt.where(DepartmentModel.organization_id == organization_id)
        rows, page = await apply_query_options(
            self._session,
            stmt,
            DepartmentModel,
            options,
            filter_columns=self._FILTER_COLUMNS,
            search_columns=self._SEARCH_COLUMNS,
        )
        return [self._to_entity(row) for row in rows], page

    async def name_exists(
        self, organization_id: UUID, name: str, exclude_id: UUID | None = None
    ) -> bool:
        criteria = [DepartmentModel.organization_id == organization_id, DepartmentModel.name == name]
        if exclude_id is not None:
            criteria.append(DepartmentModel.id != exclude_id)
        return await count_where(self._session, DepartmentModel, *criteria) > 0

    async def count_by_organization(self, organization_id: UUID) -> int:
        return await count_where(
            self._session, DepartmentModel, DepartmentModel.organization_id == organization_id
        )
