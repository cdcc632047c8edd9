from .common import now_millis
from .enums import Gender, LogoStatus, MembershipStatus, RoleStatus, UserStatus
from .page import PageResult, QueryOptions, clamp_page_window
from .user_profile import UserProfile
from .organization import Organization, OrganizationLogo, generate_organization_code
from .department import Department
from .membership import UserMembership
from .role import Permission, RoleDefinition, UserRoleAssignment
from .menu import Menu

__all__ = [
    "now_millis",
    "Gender",
    "LogoStatus",
    "MembershipStatus",
    "RoleStatus",
    "UserStatus",
    "PageResult",
    "QueryOptions",
    "clamp_page_window",
    "UserProfile",
    "Organization",
    "OrganizationLogo",
    "generate_organization_code",
    "Department",
    "UserMembership",
    "Permission",
    "RoleDefinition",
    "UserRoleAssignment",
    "Menu",
]
