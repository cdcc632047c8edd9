"""Concrete repository implementation for UserProfile backed by SQLAlchemy."""

import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from identity_srv.application.converters.value_boxing import (
    decode_string_list,
    encode_string_list,
)
from identity_srv.application.interfaces import UserProfileRepository
from identity_srv.domain.entities import (
    Gender,
    PageResult,
    QueryOptions,
    UserProfile,
    UserStatus,
)
from identity_srv.infrastructure.database.models import UserMembershipModel, UserProfileModel
from identity_srv.infrastructure.database.repositories.query import (
    apply_query_options,
    flush_or_conflict,
)

logger = logging.getLogger(__name__)


class SQLAlchemyUserProfileRepository(UserProfileRepository):
    """Implements the UserProfileRepository port using SQLAlchemy async sessions."""

    _FILTER_COLUMNS = {
        "username": UserProfileModel.username,
        "email": UserProfileModel.email,
        "status": UserProfileModel.status,
        "gender": UserProfileModel.gender,
        "employee_id": UserProfileModel.employee_id,
        "is_system_user": UserProfileModel.is_system_user,
        "created_at": UserProfileModel.created_at,
        "updated_at": UserProfileModel.updated_at,
        "last_login_time": UserProfileModel.last_login_time,
    }
    _SEARCH_COLUMNS = [
        UserProfileModel.username,
        UserProfileModel.real_name,
        UserProfileModel.email,
        UserProfileModel.phone,
        UserProfileModel.employee_id,
    ]

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: UserProfileModel) -> UserProfile:
        """Map ORM model → domain entity."""
        return UserProfile(
            id=model.id,
            username=model.username,
            password_hash=model.password_hash,
            email=model.email,
            phone=model.phone,
            is_system_user=model.is_system_user,
            first_name=model.first_name,
            last_name=model.last_name,
            real_name=model.real_name,
            gender=Gender(model.gender),
            professional_title=model.professional_title,
            license_number=model.license_number,
            specialties=decode_string_list(model.specialties) or [],
            employee_id=model.employee_id,
            status=UserStatus(model.status),
            login_attempts=model.login_attempts,
            must_change_password=model.must_change_password,
            account_expiry=model.account_expiry,
            created_by=model.created_by,
            updated_by=model.updated_by,
            last_login_time=model.last_login_time,
            version=model.version,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    @staticmethod
    def _values(entity: UserProfile) -> dict:
        return {
            "username": entity.username,
            "password_hash": entity.password_hash,
            "email": entity.email,
            "phone": entity.phone,
            "is_system_user": entity.is_system_user,
            "first_name": entity.first_name,
            "last_name": entity.last_name,
            "real_name": entity.real_name,
            "gender": int(entity.gender),
            "professional_title": entity.professional_title,
            "license_number": entity.license_number,
            "specialties": encode_string_list(entity.specialties),
            "employee_id": entity.employee_id,
            "status": int(entity.status),
            "login_attempts": entity.login_attempts,
            "must_change_password": entity.must_change_password,
            "account_expiry": entity.account_expiry,
            "created_by": entity.created_by,
            "updated_by": entity.updated_by,
            "last_login_time": entity.last_login_time,
            "version": entity.version,
            "created_at": entity.created_at,
            "updated_at": entity.updated_at,
        }

    async def get_by_id(self, user_id: UUID) -> UserProfile | None:
        result = await self._session.get(UserProfileModel, user_id)
        return self._to_entity(result) if result else None

    async def get_by_username(self, username: str) -> UserProfile | None:
        stmt = select(UserProfileModel).where(UserProfileModel.username == username)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def create(self, user: UserProfile) -> UserProfile:
        model = UserProfileModel(id=user.id, **self._values(user))
        self._session.add(model)
        await flush_or_conflict(self._session, "UserProfile")
        return self._to_entity(model)

    async def update(self, user: UserProfile) -> UserProfile:
        model = await self._session.get(UserProfileModel, user.id)
        if model is None:
            raise ValueError(f"UserProfile {user.id} not found in database")
        for key, value in self._values(user).items():
            setattr(model, key, value)
        await flush_or_conflict(self._session, "UserProfile")
        return self._to_entity(model)

    async def delete(self, user_id: UUID) -> bool:
        model = await self._session.get(UserProfileModel, user_id)
        if model is None:
            return False
        await self._session.delete(model)
        await self._session.flush()
        return True

    async def find(
        self,
        options: QueryOptions,
        *,
        organization_id: UUID | None = None,
        status: UserStatus | None = None,
    ) -> tuple[list[UserProfile], PageResult]:
        stmt = select(UserProfileModel)
        if organization_id is not None:
            members = select(UserMembershipModel.user_id).where(
                UserMembershipModel.organization_id == organization_id
            )
            stmt = stmt.where(UserProfileModel.id.in_(members))
        if status is not None:
            stmt = stmt.where(UserProfileModel.status == int(status))

        rows, page = await apply_query_options(
            self._session,
            stmt,
            UserProfileModel,
            options,
            filter_columns=self._FILTER_COLUMNS,
            search_columns=self._SEARCH_COLUMNS,
        )
        return [self._to_entity(row) for row in rows], page

    async def record_failed_login(self, user_id: UUID, lock_threshold: int) -> int:
        model = await self._session.get(UserProfileModel, user_id)
        if model is None:
            return 0
        model.login_attempts += 1
        if lock_threshold > 0 and model.login_attempts >= lock_threshold:
            model.status = int(UserStatus.LOCKED)
            logger.warning("Locking user %s after %d failed logins", user_id, model.login_attempts)
        attempts = model.login_attempts
        # The caller raises right after this; commit before the request rolls back.
        await self._session.commit()
        return attempts
