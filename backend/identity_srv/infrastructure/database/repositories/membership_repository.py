"""Concrete repository implementation for UserMembership backed by SQLAlchemy."""

from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from identity_srv.application.interfaces import MembershipRepository
from identity_srv.domain.entities import (
    MembershipStatus,
    PageResult,
    QueryOptions,
    UserMembership,
)
from identity_srv.infrastructure.database.models import UserMembershipModel
from identity_srv.infrastructure.database.repositories.query import (
    apply_query_options,
    count_where,
    flush_or_conflict,
)


class SQLAlchemyMembershipRepository(MembershipRepository):
    """Implements the MembershipRepository port using SQLAlchemy async sessions."""

    _FILTER_COLUMNS = {
        "department_id": UserMembershipModel.department_id,
        "status": UserMembershipModel.status,
        "is_primary": UserMembershipModel.is_primary,
        "valid_from": UserMembershipModel.valid_from,
        "valid_to": UserMembershipModel.valid_to,
        "created_at": UserMembershipModel.created_at,
        "updated_at": UserMembershipModel.updated_at,
    }

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: UserMembershipModel) -> UserMembership:
        return UserMembership(
            id=model.id,
            user_id=model.user_id,
            organization_id=model.organization_id,
            department_id=model.department_id,
            status=MembershipStatus(model.status),
            is_primary=model.is_primary,
            valid_from=model.valid_from,
            valid_to=model.valid_to,
            created_by=model.created_by,
            updated_by=model.updated_by,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    @staticmethod
    def _values(entity: UserMembership) -> dict:
        return {
            "user_id": entity.user_id,
            "organization_id": entity.organization_id,
            "department_id": entity.department_id,
            "status": int(entity.status),
            "is_primary": entity.is_primary,
            "valid_from": entity.valid_from,
            "valid_to": entity.valid_to,
            "created_by": entity.created_by,
            "updated_by": entity.updated_by,
            "created_at": entity.created_at,
            "updated_at": entity.updated_at,
        }

    async def get_by_id(self, membership_id: UUID) -> UserMembership | None:
        result = await self._session.get(UserMembershipModel, membership_id)
        return self._to_entity(result) if result else None

    async def create(self, membership: UserMembership) -> UserMembership:
        model = UserMembershipModel(id=membership.id, **self._values(membership))
        self._session.add(model)
        await flush_or_conflict(self._session, "UserMembership")
        return self._to_entity(model)

    async def update(self, membership: UserMembership) -> UserMembership:
        model = await self._session.get(UserMembershipModel, membership.id)
        if model is None:
            raise ValueError(f"UserMembership {membership.id} not found in database")
        for key, value in self._values(membership).items():
            setattr(model, key, value)
        await flush_or_conflict(self._session, "UserMembership")
        return self._to_entity(model)

    async def delete(self, membership_id: UUID) -> bool:
        model = await self._session.get(UserMembershipModel, membership_id)
        if model is None:
            return False
        await self._session.delete(model)
        await self._session.flush()
        return True

    async def find(
        self,
        options: QueryOptions,
        *,
        user_id: UUID | None = None,
        organization_id: UUID | None = None,
    ) -> tuple[list[UserMembership], PageResult]:
        stmt = select(UserMembershipModel)
        if user_id is not None:
            stmt = stmt.where(UserMembershipModel.user_id == user_id)
        if organization_id is not None:
            stmt = stmt.where(UserMembershipModel.organization_id == organization_id)
        rows, page = await apply_query_options(
            self._session,
            stmt,
            UserMembershipModel,
            options,
            filter_columns=self._FILTER_COLUMNS,
        )
        return [self._to_entity(row) for row in rows], page

    async def list_by_user(self, user_id: UUID) -> list[UserMembership]:
        stmt = (
            select(UserMembershipModel)
            .where(UserMembershipModel.user_id == user_id)
            .order_by(UserMembershipModel.is_primary.desc(), UserMembershipModel.created_at)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(row) for row in result.scalars().all()]

    async def get_primary(self, user_id: UUID) -> UserMembership | None:
        stmt = select(UserMembershipModel).where(
            UserMembershipModel.user_id == user_id,
            UserMembershipModel.is_primary.is_(True),
        )
        model = (await self._session.execute(stmt)).scalars().first()
        return self._to_entity(model) if model else None

    async def find_existing(
        self, user_id: UUID, organization_id: UUID, department_id: UUID | None
    ) -> UserMembership | None:
        stmt = select(UserMembershipModel).where(
            UserMembershipModel.user_id == user_id,
            UserMembershipModel.organization_id == organization_id,
        )
        if department_id is None:
            stmt = stmt.where(UserMembershipModel.department_id.is_(None))
        else:
            stmt = stmt.where(UserMembershipModel.department_id == department_id)
        model = (await self._session.execute(stmt)).scalars().first()
        return self._to_entity(model) if model else None

    async def clear_primary(self, user_id: UUID, exclude_id: UUID | None = None) -> None:
        stmt = (
            update(UserMembershipModel)
            .where(
                UserMembershipModel.user_id == user_id,
                UserMembershipModel.is_primary.is_(True),
            )
            .values(is_primary=False)
            .execution_options(synchronize_session="fetch")
        )
        if exclude_id is not None:
            stmt = stmt.where(UserMembershipModel.id != exclude_id)
        await self._session.execute(stmt)

    async def count_by_department(self, department_id: UUID) -> int:
        return await count_where(
            self._session, UserMembershipModel, UserMembershipModel.department_id == department_id
        )

    async def count_by_organization(self, organization_id: UUID) -> int:
        return await count_where(
            self._session,
            UserMembershipModel,
            UserMembershipModel.organization_id == organization_id,
        )
