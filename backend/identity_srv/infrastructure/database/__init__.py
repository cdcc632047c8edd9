from .base import Base
from .session import engine, async_session_factory, get_db_session
from .models import (
    DepartmentModel,
    MenuModel,
    OrganizationLogoModel,
    OrganizationModel,
    RoleDefinitionModel,
    RoleMenuModel,
    UserMembershipModel,
    UserProfileModel,
    UserRoleAssignmentModel,
)

__all__ = [
    "Base",
    "engine",
    "async_session_factory",
    "get_db_session",
    "UserProfileModel",
    "OrganizationModel",
    "OrganizationLogoModel",
    "DepartmentModel",
    "UserMembershipModel",
    "RoleDefinitionModel",
    "UserRoleAssignmentModel",
    "RoleMenuModel",
    "MenuModel",
]
