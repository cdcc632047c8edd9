"""Concrete repository implementations for versioned menus and role menus."""

from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from identity_srv.application.interfaces import MenuRepository, RoleMenuRepository
from identity_srv.domain.entities import Menu
from identity_srv.infrastructure.database.models import MenuModel, RoleMenuModel
from identity_srv.infrastructure.database.repositories.query import flush_or_conflict


class SQLAlchemyMenuRepository(MenuRepository):
    """Implements the MenuRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: MenuModel) -> Menu:
        return Menu(
            id=model.id,
            semantic_id=model.semantic_id,
            version=model.version,
            name=model.name,
            path=model.path,
            component=model.component,
            icon=model.icon,
            parent_id=model.parent_id,
            sort=model.sort,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: Menu) -> MenuModel:
        return MenuModel(
            id=entity.id,
            semantic_id=entity.semantic_id,
            version=entity.version,
            name=entity.name,
            path=entity.path,
            component=entity.component,
            icon=entity.icon,
            parent_id=entity.parent_id,
            sort=entity.sort,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    async def save_version(self, menus: list[Menu]) -> None:
        self._session.add_all([self._to_model(menu) for menu in menus])
        await flush_or_conflict(self._session, "Menu")

    async def get_latest_version(self) -> str | None:
        stmt = (
            select(MenuModel.version)
            .order_by(MenuModel.created_at.desc(), MenuModel.version.desc())
            .limit(1)
        )
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def list_by_version(self, version: str) -> list[Menu]:
        stmt = (
            select(MenuModel)
            .where(MenuModel.version == version)
            .order_by(MenuModel.sort, MenuModel.semantic_id)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(row) for row in result.scalars().all()]


class SQLAlchemyRoleMenuRepository(RoleMenuRepository):
    """Implements the RoleMenuRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def set_role_menus(self, role_id: UUID, semantic_ids: list[str]) -> None:
        await self._session.execute(delete(RoleMenuModel).where(RoleMenuModel.role_id == role_id))
        self._session.add_all(
            [RoleMenuModel(role_id=role_id, semantic_id=semantic_id) for semantic_id in semantic_ids]
        )
        await flush_or_conflict(self._session, "RoleMenu")

    async def get_role_menus(self, role_id: UUID) -> list[str]:
        stmt = (
            select(RoleMenuModel.semantic_id)
            .where(RoleMenuModel.role_id == role_id)
            .order_by(RoleMenuModel.semantic_id)
        )
        return list((await self._session.execute(stmt)).scalars().all())
