"""Shared in-memory fakes of the repository ports and fixtures wiring them."""

import copy
import dataclasses
from uuid import UUID

import pytest

from identity_srv.application.converters import Converter
from identity_srv.application.interfaces import (
    DepartmentRepository,
    LogoStorage,
    MembershipRepository,
    MenuRepository,
    OrganizationLogoRepository,
    OrganizationRepository,
    PasswordHasher,
    RoleAssignmentRepository,
    RoleDefinitionRepository,
    RoleMenuRepository,
    UserProfileRepository,
)
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
from identity_srv.domain.entities import (
    Department,
    LogoStatus,
    Menu,
    Organization,
    OrganizationLogo,
    PageResult,
    QueryOptions,
    RoleDefinition,
    UserMembership,
    UserProfile,
    UserRoleAssignment,
    UserStatus,
    clamp_page_window,
)


def _page(items: list, options: QueryOptions) -> tuple[list, PageResult]:
    items = sorted(items, key=lambda item: item.created_at, reverse=True)
    if options.fetch_all:
        return items, PageResult.build(len(items), 1, len(items))
    page, limit = clamp_page_window(options.page, options.limit)
    start = (page - 1) * limit
    return items[start : start + limit], PageResult.build(len(items), page, limit)


class _Store:
    """Dict-backed storage that hands out copies, like a real session would."""

    def __init__(self):
        self.rows: dict[UUID, object] = {}

    def put(self, entity):
        self.rows[entity.id] = copy.deepcopy(entity)
        return copy.deepcopy(entity)

    def get(self, entity_id):
        entity = self.rows.get(entity_id)
        return copy.deepcopy(entity) if entity is not None else None

    def pop(self, entity_id) -> bool:
        return self.rows.pop(entity_id, None) is not None

    def values(self) -> list:
        return [copy.deepcopy(e) for e in self.rows.values()]


class FakeUserProfileRepository(UserProfileRepository):
    def __init__(self, memberships: "FakeMembershipRepository | None" = None):
        self.store = _Store()
        self._memberships = memberships

    async def get_by_id(self, user_id: UUID) -> UserProfile | None:
        return self.store.get(user_id)

    async def get_by_username(self, username: str) -> UserProfile | None:
        return next((u for u in self.store.values() if u.username == username), None)

    async def create(self, user: UserProfile) -> UserProfile:
        return self.store.put(user)

    async def update(self, user: UserProfile) -> UserProfile:
        if user.id not in self.store.rows:
            raise ValueError(f"UserProfile {user.id} not found")
        return self.store.put(user)

    async def delete(self, user_id: UUID) -> bool:
        return self.store.pop(user_id)

    async def find(self, options, *, organization_id=None, status=None):
        users = self.store.values()
        if organization_id is not None and self._memberships is not None:
            members = {
                m.user_id
                for m in self._memberships.store.values()
                if m.organization_id == organization_id
            }
            users = [u for u in users if u.id in members]
        if status is not None:
            users = [u for u in users if u.status == status]
        if options.search:
            term = options.search.lower()
            users = [
                u for u in users
                if term in u.username.lower() or term in u.real_name.lower() or term in u.email.lower()
            ]
        return _page(users, options)

    async def record_failed_login(self, user_id: UUID, lock_threshold: int) -> int:
        user = self.store.rows[user_id]
        user.login_attempts += 1
        if lock_threshold > 0 and user.login_attempts >= lock_threshold:
            user.status = UserStatus.LOCKED
        return user.login_attempts


class FakeOrganizationRepository(OrganizationRepository):
    def __init__(self):
        self.store = _Store()

    async def get_by_id(self, organization_id):
        return self.store.get(organization_id)

    async def get_by_code(self, code):
        return next((o for o in self.store.values() if o.code == code), None)

    async def create(self, organization: Organization) -> Organization:
        return self.store.put(organization)

    async def update(self, organization: Organization) -> Organization:
        return self.store.put(organization)

    async def delete(self, organization_id) -> bool:
        return self.store.pop(organization_id)

    async def find(self, options, *, parent_id=None):
        orgs = self.store.values()
        if parent_id is not None:
            orgs = [o for o in orgs if o.parent_id == parent_id]
        return _page(orgs, options)

    async def count_children(self, organization_id) -> int:
        return sum(1 for o in self.store.values() if o.parent_id == organization_id)


class FakeOrganizationLogoRepository(OrganizationLogoRepository):
    def __init__(self):
        self.store = _Store()

    async def get_by_id(self, logo_id):
        return self.store.get(logo_id)

    async def get_bound_to_organization(self, organization_id):
        return next(
            (
                logo for logo in self.store.values()
                if logo.bound_organization_id == organization_id and logo.status == LogoStatus.BOUND
            ),
            None,
        )

    async def create(self, logo: OrganizationLogo) -> OrganizationLogo:
        return self.store.put(logo)

    async def update(self, logo: OrganizationLogo) -> OrganizationLogo:
        return self.store.put(logo)


class FakeLogoStorage(LogoStorage):
    def __init__(self):
        self.files: dict[str, bytes] = {}

    async def upload(self, file_id: str, content: bytes, mime_type: str) -> None:
        self.files[file_id] = content

    async def delete(self, file_id: str) -> bool:
        return self.files.pop(file_id, None) is not None

    def download_url(self, file_id: str) -> str:
        return f"/static/logos/{file_id}"


class FakeDepartmentRepository(DepartmentRepository):
    def __init__(self):
        self.store = _Store()

    async def get_by_id(self, department_id):
        return self.store.get(department_id)

    async def create(self, department: Department) -> Department:
        return self.store.put(department)

    async def update(self, department: Department) -> Department:
        return self.store.put(department)

    async def delete(self, department_id) -> bool:
        return self.store.pop(department_id)

    async def find(self, options, *, organization_id=None):
        departments = self.store.values()
        if organization_id is not None:
            departments = [d for d in departments if d.organization_id == organization_id]
        return _page(departments, options)

    async def name_exists(self, organization_id, name, exclude_id=None) -> bool:
        return any(
            d.organization_id == organization_id and d.name == name and d.id != exclude_id
            for d in self.store.values()
        )

    async def count_by_organization(self, organization_id) -> int:
        return sum(1 for d in self.store.values() if d.organization_id == organization_id)


class FakeMembershipRepository(MembershipRepository):
    def __init__(self):
        self.store = _Store()

    async def get_by_id(self, membership_id):
        return self.store.get(membership_id)

    async def create(self, membership: UserMembership) -> UserMembership:
        return self.store.put(membership)

    async def update(self, membership: UserMembership) -> UserMembership:
        return self.store.put(membership)

    async def delete(self, membership_id) -> bool:
        return self.store.pop(membership_id)

    async def find(self, options, *, user_id=None, organization_id=None):
        memberships = self.store.values()
        if user_id is not None:
            memberships = [m for m in memberships if m.user_id == user_id]
        if organization_id is not None:
            memberships = [m for m in memberships if m.organization_id == organization_id]
        return _page(memberships, options)

    async def list_by_user(self, user_id):
        return [m for m in self.store.values() if m.user_id == user_id]

    async def get_primary(self, user_id):
        return next(
            (m for m in self.store.values() if m.user_id == user_id and m.is_primary), None
        )

    async def find_existing(self, user_id, organization_id, department_id):
        return next(
            (
                m for m in self.store.values()
                if m.user_id == user_id
                and m.organization_id == organization_id
                and m.department_id == department_id
            ),
            None,
        )

    async def clear_primary(self, user_id, exclude_id=None) -> None:
        for membership in self.store.rows.values():
            if membership.user_id == user_id and membership.id != exclude_id:
                membership.is_primary = False

    async def count_by_department(self, department_id) -> int:
        return sum(1 for m in self.store.values() if m.department_id == department_id)

    async def count_by_organization(self, organization_id) -> int:
        return sum(1 for m in self.store.values() if m.organization_id == organization_id)


class FakeRoleDefinitionRepository(RoleDefinitionRepository):
    def __init__(self):
        self.store = _Store()

    async def get_by_id(self, role_id):
        return self.store.get(role_id)

    async def get_by_name(self, name):
        return next((r for r in self.store.values() if r.name == name), None)

    async def list_by_ids(self, role_ids):
        return [r for r in self.store.values() if r.id in set(role_ids)]

    async def create(self, role: RoleDefinition) -> RoleDefinition:
        return self.store.put(role)

    async def update(self, role: RoleDefinition) -> RoleDefinition:
        return self.store.put(role)

    async def delete(self, role_id) -> bool:
        return self.store.pop(role_id)

    async def find(self, options, *, name=None, status=None, is_system_role=None):
        roles = self.store.values()
        if name is not None:
            roles = [r for r in roles if name.lower() in r.name.lower()]
        if status is not None:
            roles = [r for r in roles if r.status == status]
        if is_system_role is not None:
            roles = [r for r in roles if r.is_system_role == is_system_role]
        return _page(roles, options)


class FakeRoleAssignmentRepository(RoleAssignmentRepository):
    def __init__(self):
        self.store = _Store()

    async def get_by_id(self, assignment_id):
        return self.store.get(assignment_id)

    async def get_by_user_and_role(self, user_id, role_id):
        return next(
            (a for a in self.store.values() if a.user_id == user_id and a.role_id == role_id),
            None,
        )

    async def get_last_for_user(self, user_id):
        mine = [a for a in self.store.values() if a.user_id == user_id]
        return max(mine, key=lambda a: a.created_at, default=None)

    async def create(self, assignment: UserRoleAssignment) -> UserRoleAssignment:
        return self.store.put(assignment)

    async def update(self, assignment: UserRoleAssignment) -> UserRoleAssignment:
        return self.store.put(assignment)

    async def delete(self, assignment_id) -> bool:
        return self.store.pop(assignment_id)

    async def find(self, options, *, user_id=None, role_id=None):
        assignments = self.store.values()
        if user_id is not None:
            assignments = [a for a in assignments if a.user_id == user_id]
        if role_id is not None:
            assignments = [a for a in assignments if a.role_id == role_id]
        return _page(assignments, options)

    async def count_by_role(self, role_id) -> int:
        return sum(1 for a in self.store.values() if a.role_id == role_id)

    async def list_user_ids_by_role(self, role_id):
        return [a.user_id for a in self.store.values() if a.role_id == role_id]

    async def list_role_ids_by_user(self, user_id):
        return [a.role_id for a in self.store.values() if a.user_id == user_id]

    async def replace_role_users(self, role_id, user_ids, actor_id) -> int:
        for assignment in self.store.values():
            if assignment.role_id == role_id and assignment.user_id not in user_ids:
                self.store.pop(assignment.id)
        held = set(await self.list_user_ids_by_role(role_id))
        for user_id in user_ids:
            if user_id not in held:
                self.store.put(
                    UserRoleAssignment(
                        user_id=user_id, role_id=role_id, created_by=actor_id, updated_by=actor_id
                    )
                )
        return len(set(user_ids))


class FakeMenuRepository(MenuRepository):
    def __init__(self):
        self.versions: dict[str, list[Menu]] = {}

    async def save_version(self, menus: list[Menu]) -> None:
        for menu in menus:
            self.versions.setdefault(menu.version, []).append(dataclasses.replace(menu, children=[]))

    async def get_latest_version(self) -> str | None:
        return next(reversed(self.versions), None)

    async def list_by_version(self, version: str) -> list[Menu]:
        nodes = [copy.deepcopy(m) for m in self.versions.get(version, [])]
        for node in nodes:
            node.children = []
        return sorted(nodes, key=lambda m: m.sort)


class FakeRoleMenuRepository(RoleMenuRepository):
    def __init__(self):
        self.grants: dict[UUID, list[str]] = {}

    async def set_role_menus(self, role_id, semantic_ids) -> None:
        self.grants[role_id] = list(semantic_ids)

    async def get_role_menus(self, role_id):
        return list(self.grants.get(role_id, []))


class FakePasswordHasher(PasswordHasher):
    """Reversible stand-in so tests stay fast."""

    def hash(self, password: str) -> str:
        return f"hashed:{password}"

    def verify(self, password: str, hashed: str) -> bool:
        return hashed == f"hashed:{password}"


class FakeRepositories:
    """One consistent set of fakes, sharing state the way one session would."""

    def __init__(self):
        self.memberships = FakeMembershipRepository()
        self.users = FakeUserProfileRepository(self.memberships)
        self.organizations = FakeOrganizationRepository()
        self.logos = FakeOrganizationLogoRepository()
        self.logo_storage = FakeLogoStorage()
        self.departments = FakeDepartmentRepository()
        self.roles = FakeRoleDefinitionRepository()
        self.assignments = FakeRoleAssignmentRepository()
        self.menus = FakeMenuRepository()
        self.role_menus = FakeRoleMenuRepository()
        self.hasher = FakePasswordHasher()


@pytest.fixture
def repos() -> FakeRepositories:
    return FakeRepositories()


@pytest.fixture
def converter() -> Converter:
    return Converter()


@pytest.fixture
def user_service(repos, converter) -> UserProfileService:
    return UserProfileService(repos.users, repos.hasher, converter.user_profile, converter.enums)


@pytest.fixture
def logo_service(repos, converter) -> LogoService:
    return LogoService(
        repos.logos,
        repos.organizations,
        repos.logo_storage,
        converter.logo,
        temporary_ttl_days=7,
        max_size_bytes=1024,
        allowed_mime_types=["image/png", "image/svg+xml"],
    )


@pytest.fixture
def organization_service(repos, converter, logo_service) -> OrganizationService:
    return OrganizationService(
        repos.organizations,
        repos.departments,
        repos.memberships,
        logo_service,
        converter.organization,
    )


@pytest.fixture
def department_service(repos, converter) -> DepartmentService:
    return DepartmentService(
        repos.departments, repos.organizations, repos.memberships, converter.department
    )


@pytest.fixture
def membership_service(repos, converter) -> MembershipService:
    return MembershipService(
        repos.memberships,
        repos.users,
        repos.organizations,
        repos.departments,
        converter.membership,
    )


@pytest.fixture
def role_service(repos, converter) -> RoleDefinitionService:
    return RoleDefinitionService(
        repos.roles, repos.assignments, converter.role_definition, converter.enums
    )


@pytest.fixture
def assignment_service(repos, converter) -> RoleAssignmentService:
    return RoleAssignmentService(
        repos.assignments, repos.roles, repos.users, converter.role_assignment
    )


@pytest.fixture
def menu_service(repos, converter) -> MenuService:
    return MenuService(
        repos.menus, repos.role_menus, repos.roles, repos.assignments, converter.menu
    )


@pytest.fixture
def auth_service(repos, converter, menu_service) -> AuthenticationService:
    return AuthenticationService(
        repos.users,
        repos.memberships,
        menu_service,
        repos.hasher,
        converter,
        max_login_attempts=3,
    )
