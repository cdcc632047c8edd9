from .user_profile_repository import SQLAlchemyUserProfileRepository
from .organization_repository import (
    SQLAlchemyOrganizationLogoRepository,
    SQLAlchemyOrganizationRepository,
)
from .department_repository import SQLAlchemyDepartmentRepository
from .membership_repository import SQLAlchemyMembershipRepository
from .role_repository import SQLAlchemyRoleAssignmentRepository, SQLAlchemyRoleDefinitionRepository
from .menu_repository import SQLAlchemyMenuRepository, SQLAlchemyRoleMenuRepository

__all__ = [
    "SQLAlchemyUserProfileRepository",
    "SQLAlchemyOrganizationRepository",
    "SQLAlchemyOrganizationLogoRepository",
    "SQLAlchemyDepartmentRepository",
    "SQLAlchemyMembershipRepository",
    "SQLAlchemyRoleDefinitionRepository",
    "SQLAlchemyRoleAssignmentRepository",
    "SQLAlchemyMenuRepository",
    "SQLAlchemyRoleMenuRepository",
]
