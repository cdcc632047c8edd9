from .converter import Converter
from .department_converter import DepartmentConverter
from .enum_converter import EnumConverter
from .logo_converter import LogoConverter
from .membership_converter import MembershipConverter
from .menu_converter import MenuConverter
from .organization_converter import OrganizationConverter
from .page_converter import page_request_to_query_options, page_result_to_response
from .permission_converter import PermissionConverter
from .role_assignment_converter import RoleAssignmentConverter
from .role_definition_converter import RoleDefinitionConverter
from .user_profile_converter import UserProfileConverter

__all__ = [
    "Converter",
    "DepartmentConverter",
    "EnumConverter",
    "LogoConverter",
    "MembershipConverter",
    "MenuConverter",
    "OrganizationConverter",
    "page_request_to_query_options",
    "page_result_to_response",
    "PermissionConverter",
    "RoleAssignmentConverter",
    "RoleDefinitionConverter",
    "UserProfileConverter",
]
