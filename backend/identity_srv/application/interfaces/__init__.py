from .user_profile_repository import UserProfileRepository
from .organization_repository import OrganizationLogoRepository, OrganizationRepository
from .logo_storage import LogoStorage
from .department_repository import DepartmentRepository
from .membership_repository import MembershipRepository
from .role_repository import RoleAssignmentRepository, RoleDefinitionRepository
from .menu_repository import MenuRepository, RoleMenuRepository
from .password_hasher import PasswordHasher

__all__ = [
    "UserProfileRepository",
    "OrganizationRepository",
    "OrganizationLogoRepository",
    "LogoStorage",
    "DepartmentRepository",
    "MembershipRepository",
    "RoleDefinitionRepository",
    "RoleAssignmentRepository",
    "MenuRepository",
    "RoleMenuRepository",
    "PasswordHasher",
]
