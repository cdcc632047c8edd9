"""Concrete repository implementations for role definitions and assignments."""

import logging
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from identity_srv.application.interfaces import RoleAssignmentRepository, RoleDefinitionRepository
from identity_srv.domain.entities import (
    PageResult,
    Permission,
    QueryOptions,
    RoleDefinition,
    RoleStatus,
    UserRoleAssignment,
    now_millis,
)
from identity_srv.infrastructure.database.models import (
    RoleDefinitionModel,
    UserRoleAssignmentModel,
)
from identity_srv.infrastructure.database.repositories.query import (
    apply_query_options,
    count_where,
    flush_or_conflict,
)

logger = logging.getLogger(__name__)


def _permissions_to_json(permissions: list[Permission]) -> list[dict]:
    return [
        {"resource": p.resource, "action": p.action, "description": p.description}
        for p in permissions
    ]


def _permissions_from_json(raw: list | None) -> list[Permission]:
    return [
        Permission(
            resource=item.get("resource", ""),
            action=item.get("action", ""),
            description=item.get("description", ""),
        )
        for item in raw or []
        if isinstance(item, dict)
    ]


class SQLAlchemyRoleDefinitionRepository(RoleDefinitionRepository):
    """Implements the RoleDefinitionRepository port using SQLAlchemy async sessions."""

    _FILTER_COLUMNS = {
        "name": RoleDefinitionModel.name,
        "status": RoleDefinitionModel.status,
        "is_system_role": RoleDefinitionModel.is_system_role,
        "created_at": RoleDefinitionModel.created_at,
        "updated_at": RoleDefinitionModel.updated_at,
    }
    _SEARCH_COLUMNS = [RoleDefinitionModel.name, RoleDefinitionModel.description]

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: RoleDefinitionModel) -> RoleDefinition:
        return RoleDefinition(
            id=model.id,
            name=model.name,
            description=model.description,
            status=RoleStatus(model.status),
            permissions=_permissions_from_json(model.permissions),
            is_system_role=model.is_system_role,
            created_by=model.created_by,
            updated_by=model.updated_by,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    @staticmethod
    def _values(entity: RoleDefinition) -> dict:
        return {
            "name": entity.name,
            "description": entity.description,
            "status": int(entity.status),
            "permissions": _permissions_to_json(entity.permissions),
            "is_system_role": entity.is_system_role,
            "created_by": entity.created_by,
            "updated_by": entity.updated_by,
            "created_at": entity.created_at,
            "updated_at": entity.updated_at,
        }

    async def get_by_id(self, role_id: UUID) -> RoleDefinition | None:
        result = await self._session.get(RoleDefinitionModel, role_id)
        return self._to_entity(result) if result else None

    async def get_by_name(self, name: str) -> RoleDefinition | None:
        stmt = select(RoleDefinitionModel).where(RoleDefinitionModel.name == name)
        model = (await self._session.execute(stmt)).scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def list_by_ids(self, role_ids: list[UUID]) -> list[RoleDefinition]:
        if not role_ids:
            return []
        stmt = (
            select(RoleDefinitionModel)
            .where(RoleDefinitionModel.id.in_(role_ids))
            .order_by(RoleDefinitionModel.created_at)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(row) for row in result.scalars().all()]

    async def create(self, role: RoleDefinition) -> RoleDefinition:
        model = RoleDefinitionModel(id=role.id, **self._values(role))
        self._session.add(model)
        await flush_or_conflict(self._session, "RoleDefinition")
        return self._to_entity(model)

    async def update(self, role: RoleDefinition) -> RoleDefinition:
        model = await self._session.get(RoleDefinitionModel, role.id)
        if model is None:
            raise ValueError(f"RoleDefinition {role.id} not found in database")
        for key, value in self._values(role).items():
            setattr(model, key, value)
        await flush_or_conflict(self._session, "RoleDefinition")
        return self._to_entity(model)

    async def delete(self, role_id: UUID) -> bool:
        model = await self._session.get(RoleDefinitionModel, role_id)
        if model is None:
            return False
        await self._session.delete(model)
        await self._session.flush()
        return True

    async def find(
        self,
        options: QueryOptions,
        *,
        name: str | None = None,
        status: RoleStatus | None = None,
        is_system_role: bool | None = None,
    ) -> tuple[list[RoleDefinition], PageResult]:
        stmt = select(RoleDefinitionModel)
        if name is not None:
            stmt = stmt.where(RoleDefinitionModel.name.ilike(f"%{name}%"))
        if status is not None:
            stmt = stmt.where(RoleDefinitionModel.status == int(status))
        if is_system_role is not None:
            stmt = stmt.where(RoleDefinitionModel.is_system_role.is_(is_system_role))
        rows, page = await apply_query_options(
            self._session,
            stmt,
            RoleDefinitionModel,
            options,
            filter_columns=self._FILTER_COLUMNS,
            search_columns=self._SEARCH_COLUMNS,
        )
        return [self._to_entity(row) for row in rows], page


class SQLAlchemyRoleAssignmentRepository(RoleAssignmentRepository):
    """Implements the RoleAssignmentRepository port using SQLAlchemy async sessions."""

    _FILTER_COLUMNS = {
        "created_at": UserRoleAssignmentModel.created_at,
        "updated_at": UserRoleAssignmentModel.updated_at,
    }

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: UserRoleAssignmentModel) -> UserRoleAssignment:
        return UserRoleAssignment(
            id=model.id,
            user_id=model.user_id,
            role_id=model.role_id,
            created_by=model.created_by,
            updated_by=model.updated_by,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    @staticmethod
    def _values(entity: UserRoleAssignment) -> dict:
        return {
            "user_id": entity.user_id,
            "role_id": entity.role_id,
            "created_by": entity.created_by,
            "updated_by": entity.updated_by,
            "created_at": entity.created_at,
            "updated_at": entity.updated_at,
        }

    async def get_by_id(self, assignment_id: UUID) -> UserRoleAssignment | None:
        result = await self._session.get(UserRoleAssignmentModel, assignment_id)
        return self._to_entity(result) if result else None

    async def get_by_user_and_role(
        self, user_id: UUID, role_id: UUID
    ) -> UserRoleAssignment | None:
        stmt = select(UserRoleAssignmentModel).where(
            UserRoleAssignmentModel.user_id == user_id,
            UserRoleAssignmentModel.role_id == role_id,
        )
        model = (await self._session.execute(stmt)).scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_last_for_user(self, user_id: UUID) -> UserRoleAssignment | None:
        stmt = (
            select(UserRoleAssignmentModel)
            .where(UserRoleAssignmentModel.user_id == user_id)
            .order_by(UserRoleAssignmentModel.created_at.desc())
            .limit(1)
        )
        model = (await self._session.execute(stmt)).scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def create(self, assignment: UserRoleAssignment) -> UserRoleAssignment:
        model = UserRoleAssignmentModel(id=assignment.id, **self._values(assignment))
        self._session.add(model)
        await flush_or_conflict(self._session, "UserRoleAssignment")
        return self._to_entity(model)

    async def update(self, assignment: UserRoleAssignment) -> UserRoleAssignment:
        model = await self._session.get(UserRoleAssignmentModel, assignment.id)
        if model is None:
            raise ValueError(f"UserRoleAssignment {assignment.id} not found in database")
        for key, value in self._values(assignment).items():
            setattr(model, key, value)
        await flush_or_conflict(self._session, "UserRoleAssignment")
        return self._to_entity(model)

    async def delete(self, assignment_id: UUID) -> bool:
        model = await self._session.get(UserRoleAssignmentModel, assignment_id)
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
        role_id: UUID | None = None,
    ) -> tuple[list[UserRoleAssignment], PageResult]:
        stmt = select(UserRoleAssignmentModel)
        if user_id is not None:
            stmt = stmt.where(UserRoleAssignmentModel.user_id == user_id)
        if role_id is not None:
            stmt = stmt.where(UserRoleAssignmentModel.role_id == role_id)
        rows, page = await apply_query_options(
            self._session,
            stmt,
            UserRoleAssignmentModel,
            options,
            filter_columns=self._FILTER_COLUMNS,
        )
        return [self._to_entity(row) for row in rows], page

    async def count_by_role(self, role_id: UUID) -> int:
        return await count_where(
            self._session, UserRoleAssignmentModel, UserRoleAssignmentModel.role_id == role_id
        )

    async def list_user_ids_by_role(self, role_id: UUID) -> list[UUID]:
        stmt = (
            select(UserRoleAssignmentModel.user_id)
            .where(UserRoleAssignmentModel.role_id == role_id)
            .order_by(UserRoleAssignmentModel.created_at)
        )
        return list((await self._session.execute(stmt)).scalars().all())

    async def list_role_ids_by_user(self, user_id: UUID) -> list[UUID]:
        stmt = (
            select(UserRoleAssignmentModel.role_id)
            .where(UserRoleAssignmentModel.user_id == user_id)
            .order_by(UserRoleAssignmentModel.created_at)
        )
        return list((await self._session.execute(stmt)).scalars().all())

    async def replace_role_users(
        self, role_id: UUID, user_ids: list[UUID], actor_id: UUID | None
    ) -> int:
        current = set(await self.list_user_ids_by_role(role_id))
        wanted = set(user_ids)

        stale = current - wanted
        if stale:
            await self._session.execute(
                delete(UserRoleAssignmentModel).where(
                    UserRoleAssignmentModel.role_id == role_id,
                    UserRoleAssignmentModel.user_id.in_(list(stale)),
                )
            )

        now = now_millis()
        for user_id in user_ids:
            if user_id in current:
                continue
            assignment = UserRoleAssignment(
                user_id=user_id,
                role_id=role_id,
                created_by=actor_id,
                updated_by=actor_id,
                created_at=now,
                updated_at=now,
            )
            self._session.add(UserRoleAssignmentModel(id=assignment.id, **self._values(assignment)))

        await flush_or_conflict(self._session, "UserRoleAssignment")
        logger.debug(
            "Role %s: removed %d holder(s), added %d", role_id, len(stale), len(wanted - current)
        )
        return len(wanted)
