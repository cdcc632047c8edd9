"""FastAPI dependency injection — wires infrastructure to application layer.

Each request gets its own session; services and repositories are built per
request and hold no state beyond it.
"""

from collections.abc import AsyncGenerator
from functools import lru_cache

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from identity_srv.config import get_settings
from identity_srv.application.converters import Converter
from identity_srv.application.services import (
    AuthenticationService,
    DepartmentService,
    LogoService,
    MembershipService,
    MenuService,
    OrganizationService,
    RoleAssignmentService,
    RoleDefinitionService,
    UserProfileService,
)
from identity_srv.infrastructure.database.session import get_db_session
from identity_srv.infrastructure.database.repositories import (
    SQLAlchemyDepartmentRepository,
    SQLAlchemyMembershipRepository,
    SQLAlchemyMenuRepository,
    SQLAlchemyOrganizationLogoRepository,
    SQLAlchemyOrganizationRepository,
    SQLAlchemyRoleAssignmentRepository,
    SQLAlchemyRoleDefinitionRepository,
    SQLAlchemyRoleMenuRepository,
    SQLAlchemyUserProfileRepository,
)
from identity_srv.infrastructure.security.bcrypt_password_hasher import BcryptPasswordHasher
from identity_srv.infrastructure.storage.local_logo_storage import LocalLogoStorage


@lru_cache
def get_converter() -> Converter:
    """Projectors are stateless; one instance serves every request."""
    return Converter()


@lru_cache
def get_password_hasher() -> BcryptPasswordHasher:
    return BcryptPasswordHasher(rounds=get_settings().bcrypt_rounds)


@lru_cache
def get_logo_storage() -> LocalLogoStorage:
    settings = get_settings()
    return LocalLogoStorage(settings.logo_upload_dir, settings.logo_public_base_url)


# ── Builders shared by several dependencies ─────────────────────────

def build_logo_service(session: AsyncSession) -> LogoService:
    settings = get_settings()
    return LogoService(
        SQLAlchemyOrganizationLogoRepository(session),
        SQLAlchemyOrganizationRepository(session),
        get_logo_storage(),
        get_converter().logo,
        temporary_ttl_days=settings.logo_temporary_ttl_days,
        max_size_bytes=settings.logo_max_size_mb * 1024 * 1024,
        allowed_mime_types=settings.logo_allowed_mime_types,
    )


def build_menu_service(session: AsyncSession) -> MenuService:
    return MenuService(
        SQLAlchemyMenuRepository(session),
        SQLAlchemyRoleMenuRepository(session),
        SQLAlchemyRoleDefinitionRepository(session),
        SQLAlchemyRoleAssignmentRepository(session),
        get_converter().menu,
    )


# ── Per-service dependencies ─────────────────────────────────────────

async def get_authentication_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[AuthenticationService, None]:
    """Provides an AuthenticationService with users, memberships and menus wired up."""
    yield AuthenticationService(
        SQLAlchemyUserProfileRepository(session),
        SQLAlchemyMembershipRepository(session),
        build_menu_service(session),
        get_password_hasher(),
        get_converter(),
        max_login_attempts=get_settings().max_login_attempts,
    )


async def get_user_profile_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[UserProfileService, None]:
    converter = get_converter()
    yield UserProfileService(
        SQLAlchemyUserProfileRepository(session),
        get_password_hasher(),
        converter.user_profile,
        converter.enums,
    )


async def get_logo_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[LogoService, None]:
    yield build_logo_service(session)


async def get_organization_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[OrganizationService, None]:
    """Provides an OrganizationService; logo handling goes through LogoService."""
    yield OrganizationService(
        SQLAlchemyOrganizationRepository(session),
        SQLAlchemyDepartmentRepository(session),
        SQLAlchemyMembershipRepository(session),
        build_logo_service(session),
        get_converter().organization,
    )


async def get_department_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[DepartmentService, None]:
    yield DepartmentService(
        SQLAlchemyDepartmentRepository(session),
        SQLAlchemyOrganizationRepository(session),
        SQLAlchemyMembershipRepository(session),
        get_converter().department,
    )


async def get_membership_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[MembershipService, None]:
    yield MembershipService(
        SQLAlchemyMembershipRepository(session),
        SQLAlchemyUserProfileRepository(session),
        SQLAlchemyOrganizationRepository(session),
        SQLAlchemyDepartmentRepository(session),
        get_converter().membership,
    )


async def get_role_definition_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[RoleDefinitionService, None]:
    converter = get_converter()
    yield RoleDefinitionService(
        SQLAlchemyRoleDefinitionRepository(session),
        SQLAlchemyRoleAssignmentRepository(session),
        converter.role_definition,
        converter.enums,
    )


async def get_role_assignment_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[RoleAssignmentService, None]:
    yield RoleAssignmentService(
        SQLAlchemyRoleAssignmentRepository(session),
        SQLAlchemyRoleDefinitionRepository(session),
        SQLAlchemyUserProfileRepository(session),
        get_converter().role_assignment,
    )


async def get_menu_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[MenuService, None]:
    yield build_menu_service(session)
