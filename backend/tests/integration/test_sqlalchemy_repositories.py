"""SQLAlchemy repositories against an in-memory SQLite database."""

from uuid import uuid4

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from identity_srv.application.converters import page_request_to_query_options
from identity_srv.application.schemas import PageRequest
from identity_srv.application.services.menu_parser import flatten_menu_tree, parse_menu_yaml
from identity_srv.domain.entities import (
    Department,
    LogoStatus,
    Organization,
    OrganizationLogo,
    Permission,
    QueryOptions,
    RoleDefinition,
    UserMembership,
    UserProfile,
    UserRoleAssignment,
    UserStatus,
)
from identity_srv.domain.exceptions import ConflictError, InvalidArgumentError
from identity_srv.infrastructure.database.base import Base
from identity_srv.infrastructure.database.repositories import (
    SQLAlchemyDepartmentRepository,
    SQLAlchemyMembershipRepository,
    SQLAlchemyMenuRepository,
    SQLAlchemyOrganizationLogoRepository,
    SQLAlchemyOrganizationRepository,
    SQLAlchemyRoleAssignmentRepository,
    SQLAlchemyRoleDefinitionRepository,
    SQLAlchemyRoleMenuRepository,
    SQLAlchemyUserProfileRepository,
)


@pytest_asyncio.fixture
async def session():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as db_session:
        yield db_session
    await engine.dispose()


@pytest.mark.asyncio
async def test_user_round_trip_keeps_specialties(session):
    users = SQLAlchemyUserProfileRepository(session)
    created = await users.create(
        UserProfile(username="jdoe", specialties=["a", "b"], status=UserStatus.ACTIVE)
    )

    loaded = await users.get_by_username("jdoe")
    plain = await users.create(UserProfile(username="plain"))

    assert loaded.id == created.id
    assert loaded.specialties == ["a", "b"]
    assert loaded.status == UserStatus.ACTIVE
    assert (await users.get_by_id(plain.id)).specialties == []


@pytest.mark.asyncio
async def test_duplicate_username_is_a_conflict(session):
    users = SQLAlchemyUserProfileRepository(session)
    await users.create(UserProfile(username="jdoe"))
    with pytest.raises(ConflictError):
        await users.create(UserProfile(username="jdoe"))


@pytest.mark.asyncio
async def test_find_users_pages_filters_and_orders(session):
    users = SQLAlchemyUserProfileRepository(session)
    for index, name in enumerate(["carol", "alice", "bob"]):
        await users.create(UserProfile(username=name, created_at=index, status=UserStatus.ACTIVE))
    await users.create(UserProfile(username="zed", created_at=10, status=UserStatus.LOCKED))

    newest_first, page = await users.find(QueryOptions(limit=2))
    by_name, _ = await users.find(
        QueryOptions().with_order("username", False).with_filter("status", "1")
    )
    searched, _ = await users.find(QueryOptions().with_search("AL"))
    ignored, _ = await users.find(QueryOptions().with_filter("password_hash", "x"))

    assert [u.username for u in newest_first] == ["zed", "bob"]
    assert (page.total, page.total_pages, page.has_next) == (4, 2, True)
    assert [u.username for u in by_name] == ["alice", "bob", "carol"]
    assert [u.username for u in searched] == ["alice"]
    assert len(ignored) == 4


@pytest.mark.asyncio
async def test_bad_filter_value_is_rejected(session):
    users = SQLAlchemyUserProfileRepository(session)
    with pytest.raises(InvalidArgumentError):
        await users.find(QueryOptions().with_filter("status", "active"))


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("page", "limit", "expected"),
    [
        (1, -1, (1, 20, 1, 5)),
        (1, 0, (1, 20, 1, 5)),
        (-2, 2, (1, 2, 3, 2)),
        (0, 2, (1, 2, 3, 2)),
        (1, 500, (1, 100, 1, 5)),
    ],
)
async def test_out_of_range_paging_is_clamped(session, page, limit, expected):
    users = SQLAlchemyUserProfileRepository(session)
    for index in range(5):
        await users.create(UserProfile(username=f"user{index}"))

    rows, result = await users.find(
        page_request_to_query_options(PageRequest(page=page, limit=limit))
    )

    assert (result.page, result.limit, result.total_pages, len(rows)) == expected
    assert result.total == 5
    assert result.has_prev is False


@pytest.mark.asyncio
async def test_fetch_all_returns_single_page(session):
    users = SQLAlchemyUserProfileRepository(session)
    for index in range(3):
        await users.create(UserProfile(username=f"user{index}"))

    rows, page = await users.find(QueryOptions(limit=1).with_fetch_all(True))

    assert len(rows) == 3
    assert (page.page, page.limit, page.total_pages) == (1, 3, 1)


@pytest.mark.asyncio
async def test_failed_logins_lock_the_account(session):
    users = SQLAlchemyUserProfileRepository(session)
    user = await users.create(UserProfile(username="jdoe", status=UserStatus.ACTIVE))

    assert await users.record_failed_login(user.id, 2) == 1
    assert await users.record_failed_login(user.id, 2) == 2
    assert (await users.get_by_id(user.id)).status == UserStatus.LOCKED
    assert await users.record_failed_login(uuid4(), 2) == 0


@pytest.mark.asyncio
async def test_membership_primary_is_exclusive_and_members_filter_users(session):
    users = SQLAlchemyUserProfileRepository(session)
    organizations = SQLAlchemyOrganizationRepository(session)
    memberships = SQLAlchemyMembershipRepository(session)
    user = await users.create(UserProfile(username="jdoe"))
    await users.create(UserProfile(username="outsider"))
    first_org = await organizations.create(Organization(name="Group", code="GROUP"))
    second_org = await organizations.create(Organization(name="Other", code="OTHER"))
    first = await memberships.create(
        UserMembership(user_id=user.id, organization_id=first_org.id, is_primary=True)
    )
    second = await memberships.create(
        UserMembership(user_id=user.id, organization_id=second_org.id)
    )

    await memberships.clear_primary(user.id, exclude_id=second.id)
    second.is_primary = True
    await memberships.update(second)

    members, _ = await users.find(QueryOptions(), organization_id=first_org.id)
    assert (await memberships.get_primary(user.id)).id == second.id
    assert (await memberships.get_by_id(first.id)).is_primary is False
    assert [m.id for m in await memberships.list_by_user(user.id)][0] == second.id
    assert [u.username for u in members] == ["jdoe"]
    assert await memberships.find_existing(user.id, first_org.id, None) is not None
    assert await memberships.count_by_organization(second_org.id) == 1


@pytest.mark.asyncio
async def test_organization_children_departments_and_logos(session):
    organizations = SQLAlchemyOrganizationRepository(session)
    departments = SQLAlchemyDepartmentRepository(session)
    logos = SQLAlchemyOrganizationLogoRepository(session)
    root = await organizations.create(
        Organization(name="Group", code="GROUP", province_city=["Zhejiang", "Hangzhou"])
    )
    await organizations.create(Organization(name="Branch", code="BRANCH", parent_id=root.id))
    radiology = await departments.create(
        Department(name="Radiology", organization_id=root.id, available_equipment=["MRI"])
    )
    logo = await logos.create(OrganizationLogo(file_id="abc.png", expires_at=1))
    logo.bind_to_organization(root.id)
    await logos.update(logo)

    assert (await organizations.get_by_code("GROUP")).province_city == ["Zhejiang", "Hangzhou"]
    assert await organizations.count_children(root.id) == 1
    assert await departments.name_exists(root.id, "Radiology")
    assert not await departments.name_exists(root.id, "Radiology", exclude_id=radiology.id)
    assert (await departments.get_by_id(radiology.id)).available_equipment == ["MRI"]
    assert await departments.count_by_organization(root.id) == 1
    bound = await logos.get_bound_to_organization(root.id)
    assert bound.status == LogoStatus.BOUND
    assert bound.expires_at is None


@pytest.mark.asyncio
async def test_roles_assignments_and_menus(session):
    users = SQLAlchemyUserProfileRepository(session)
    roles = SQLAlchemyRoleDefinitionRepository(session)
    assignments = SQLAlchemyRoleAssignmentRepository(session)
    menus = SQLAlchemyMenuRepository(session)
    role_menus = SQLAlchemyRoleMenuRepository(session)
    alice = await users.create(UserProfile(username="alice"))
    bob = await users.create(UserProfile(username="bob"))
    role = await roles.create(
        RoleDefinition(name="auditor", permissions=[Permission(resource="users", action="read")])
    )
    await assignments.create(UserRoleAssignment(user_id=alice.id, role_id=role.id))

    bound = await assignments.replace_role_users(role.id, [bob.id], None)
    await menus.save_version(
        flatten_menu_tree(
            parse_menu_yaml("menu:\n  - name: Home\n    id: home\n    path: /\n"), "v1"
        )
    )
    await role_menus.set_role_menus(role.id, ["home"])
    await role_menus.set_role_menus(role.id, ["home"])

    assert (await roles.get_by_name("auditor")).permissions == [
        Permission(resource="users", action="read")
    ]
    assert bound == 1
    assert await assignments.list_user_ids_by_role(role.id) == [bob.id]
    assert await assignments.count_by_role(role.id) == 1
    assert await menus.get_latest_version() == "v1"
    assert [m.semantic_id for m in await menus.list_by_version("v1")] == ["home"]
    assert await role_menus.get_role_menus(role.id) == ["home"]
