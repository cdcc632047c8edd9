from .base import OperationStatusResponse, PageRequest, PageResponse
from .enums import (
    WireGender,
    WireLogoStatus,
    WireMembershipStatus,
    WireRoleStatus,
    WireUserStatus,
)
from .menu import (
    ConfigureRoleMenusRequest,
    MenuNodeSchema,
    MenuTreeResponse,
    RoleMenuTreeResponse,
    UploadMenuRequest,
    UploadMenuResponse,
    UserMenuTreeResponse,
)
from .membership import (
    AddMembershipRequest,
    CheckMembershipRequest,
    CheckMembershipResponse,
    GetUserMembershipsRequest,
    MembershipListResponse,
    UpdateMembershipRequest,
    UserMembershipSchema,
)
from .user import (
    ChangeUserStatusRequest,
    CreateUserRequest,
    ListUsersRequest,
    SearchUsersRequest,
    UnlockUserRequest,
    UpdateUserRequest,
    UserListResponse,
    UserProfileSchema,
)
from .auth import (
    ChangePasswordRequest,
    ForcePasswordChangeRequest,
    LoginRequest,
    LoginResponse,
    ResetPasswordRequest,
)
from .organization import (
    CreateOrganizationRequest,
    ListOrganizationsRequest,
    OrganizationListResponse,
    OrganizationSchema,
    UpdateOrganizationRequest,
)
from .logo import (
    BindLogoToOrganizationRequest,
    OrganizationLogoSchema,
    UploadTemporaryLogoRequest,
)
from .department import (
    CreateDepartmentRequest,
    DepartmentListResponse,
    DepartmentSchema,
    GetOrganizationDepartmentsRequest,
    UpdateDepartmentRequest,
)
from .role import (
    AssignRoleToUserRequest,
    BatchBindUsersToRoleRequest,
    BatchBindUsersToRoleResponse,
    BatchGetUserRolesRequest,
    BatchGetUserRolesResponse,
    GetUsersByRoleResponse,
    PermissionSchema,
    RevokeRoleFromUserRequest,
    RoleDefinitionCreateRequest,
    RoleDefinitionListResponse,
    RoleDefinitionQueryRequest,
    RoleDefinitionSchema,
    RoleDefinitionUpdateRequest,
    UpdateUserRoleAssignmentRequest,
    UserRoleAssignmentSchema,
    UserRoleListResponse,
    UserRoleQueryRequest,
    UserRolesSchema,
)
