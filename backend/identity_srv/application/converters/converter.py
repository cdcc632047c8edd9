"""Bundle of all projectors, assembled once at wiring time."""

from identity_srv.application.converters.department_converter import DepartmentConverter
from identity_srv.application.converters.enum_converter import EnumConverter
from identity_srv.application.converters.logo_converter import LogoConverter
from identity_srv.application.converters.membership_converter import MembershipConverter
from identity_srv.application.converters.menu_converter import MenuConverter
from identity_srv.application.converters.organization_converter import OrganizationConverter
from identity_srv.application.converters.permission_converter import PermissionConverter
from identity_srv.application.converters.role_assignment_converter import RoleAssignmentConverter
from identity_srv.application.converters.role_definition_converter import RoleDefinitionConverter
from identity_srv.application.converters.user_profile_converter import UserProfileConverter
from identity_srv.application.schemas.auth import LoginResponse
from identity_srv.domain.entities.membership import UserMembership
from identity_srv.domain.entities.menu import Menu
from identity_srv.domain.entities.user_profile import UserProfile


class Converter:
    """Holds one instance of every entity projector.

    Facades receive the bundle so tests can substitute individual projectors.
    """

    def __init__(self, enum_converter: EnumConverter | None = None):
        self.enums = enum_converter or EnumConverter()
        self.permission = PermissionConverter()
        self.role_definition = RoleDefinitionConverter(self.enums, self.permission)
        self.role_assignment = RoleAssignmentConverter()
        self.membership = MembershipConverter(self.enums)
        self.organization = OrganizationConverter()
        self.logo = LogoConverter(self.enums)
        self.department = DepartmentConverter()
        self.user_profile = UserProfileConverter(self.enums)
        self.menu = MenuConverter()

    def build_login_response(
        self,
        user: UserProfile,
        memberships: list[UserMembership],
        menu_tree: list[Menu],
        role_ids: list[str],
    ) -> LoginResponse:
        return LoginResponse(
            user_profile=self.user_profile.model_to_wire(user),
            memberships=self.membership.models_to_wire(memberships),
            menu_tree=self.menu.models_to_wire(menu_tree) or [],
            role_ids=list(role_ids),
        )
