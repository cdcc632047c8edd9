from .user_profile import UserProfileModel
from .organization import OrganizationLogoModel, OrganizationModel
from .department import DepartmentModel
from .membership import UserMembershipModel
from .role import RoleDefinitionModel, RoleMenuModel, UserRoleAssignmentModel
from .menu import MenuModel

__all__ = [
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
