from .authentication_service import AuthenticationService
from .department_service import DepartmentService
from .logo_service import LogoService
from .membership_service import MembershipService
from .menu_service import MenuService
from .organization_service import OrganizationService
from .role_assignment_service import RoleAssignmentService
from .role_definition_service import RoleDefinitionService
from .user_profile_service import UserProfileService

__all__ = [
    "AuthenticationService",
    "DepartmentService",
    "LogoService",
    "MembershipService",
    "MenuService",
    "OrganizationService",
    "RoleAssignmentService",
    "RoleDefinitionService",
    "UserProfileService",
]
