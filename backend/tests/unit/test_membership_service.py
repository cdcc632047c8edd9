"""Unit tests for the MembershipService."""

from uuid import uuid4

import pytest
import pytest_asyncio

from identity_srv.application.schemas.membership import (
    AddMembershipRequest,
    CheckMembershipRequest,
    GetUserMembershipsRequest,
    UpdateMembershipRequest,
)
from identity_srv.application.services import MembershipService
from identity_srv.domain.entities import Department, Organization, UserProfile
from identity_srv.domain.exceptions import (
    DuplicateEntityError,
    EntityNotFoundError,
    ErrorCode,
    InvalidArgumentError,
)


@pytest_asyncio.fixture
async def world(repos):
    user = await repos.users.create(UserProfile(username="jdoe"))
    org = await repos.organizations.create(Organization(name="Group", code="GROUP"))
    other = await repos.organizations.create(Organization(name="Other", code="OTHER"))
    department = await repos.departments.create(Department(name="Radiology", organization_id=org.id))
    return {
        "user": str(user.id),
        "org": str(org.id),
        "other": str(other.id),
        "department": str(department.id),
    }


@pytest.mark.asyncio
async def test_only_one_membership_stays_primary(membership_service: MembershipService, world):
    first = await membership_service.add_membership(
        AddMembershipRequest(user_id=world["user"], organization_id=world["org"], is_primary=True)
    )
    second = await membership_service.add_membership(
        AddMembershipRequest(user_id=world["user"], organization_id=world["other"], is_primary=True)
    )

    primary = await membership_service.get_primary_membership(world["user"])
    reloaded = await membership_service.get_membership(first.id)

    assert primary.id == second.id
    assert reloaded.is_primary is False


@pytest.mark.asyncio
async def test_promoting_membership_clears_previous_primary(
    membership_service: MembershipService, world
):
    first = await membership_service.add_membership(
        AddMembershipRequest(user_id=world["user"], organization_id=world["org"], is_primary=True)
    )
    second = await membership_service.add_membership(
        AddMembershipRequest(user_id=world["user"], organization_id=world["other"])
    )

    await membership_service.update_membership(
        UpdateMembershipRequest(membership_id=second.id, is_primary=True)
    )

    assert (await membership_service.get_membership(first.id)).is_primary is False
    assert (await membership_service.get_primary_membership(world["user"])).id == second.id


@pytest.mark.asyncio
async def test_duplicate_membership_is_rejected(membership_service: MembershipService, world):
    request = AddMembershipRequest(
        user_id=world["user"], organization_id=world["org"], department_id=world["department"]
    )
    await membership_service.add_membership(request)
    with pytest.raises(DuplicateEntityError) as exc_info:
        await membership_service.add_membership(request)
    assert exc_info.value.code == ErrorCode.MEMBERSHIP_ALREADY_EXISTS


@pytest.mark.asyncio
async def test_department_must_belong_to_organization(
    membership_service: MembershipService, world
):
    with pytest.raises(InvalidArgumentError):
        await membership_service.add_membership(
            AddMembershipRequest(
                user_id=world["user"],
                organization_id=world["other"],
                department_id=world["department"],
            )
        )


@pytest.mark.asyncio
async def test_unknown_user_is_reported(membership_service: MembershipService, world):
    with pytest.raises(EntityNotFoundError) as exc_info:
        await membership_service.add_membership(
            AddMembershipRequest(user_id=str(uuid4()), organization_id=world["org"])
        )
    assert exc_info.value.code == ErrorCode.USER_NOT_FOUND


@pytest.mark.asyncio
async def test_validity_window_must_be_ordered(membership_service: MembershipService, world):
    with pytest.raises(InvalidArgumentError):
        await membership_service.add_membership(
            AddMembershipRequest(
                user_id=world["user"], organization_id=world["org"], valid_from=20, valid_to=10
            )
        )


@pytest.mark.asyncio
async def test_check_membership_honours_status_and_department(
    membership_service: MembershipService, world
):
    added = await membership_service.add_membership(
        AddMembershipRequest(
            user_id=world["user"], organization_id=world["org"], department_id=world["department"]
        )
    )

    in_org = await membership_service.check_membership(
        CheckMembershipRequest(user_id=world["user"], organization_id=world["org"])
    )
    elsewhere = await membership_service.check_membership(
        CheckMembershipRequest(user_id=world["user"], organization_id=world["other"])
    )
    await membership_service.update_membership(
        UpdateMembershipRequest(membership_id=added.id, status=4)
    )
    after_end = await membership_service.check_membership(
        CheckMembershipRequest(user_id=world["user"], organization_id=world["org"])
    )

    assert in_org.is_member is True
    assert elsewhere.is_member is False
    assert after_end.is_member is False


@pytest.mark.asyncio
async def test_list_and_remove_memberships(membership_service: MembershipService, world):
    added = await membership_service.add_membership(
        AddMembershipRequest(user_id=world["user"], organization_id=world["org"])
    )
    await membership_service.add_membership(
        AddMembershipRequest(user_id=world["user"], organization_id=world["other"])
    )

    filtered = await membership_service.get_user_memberships(
        GetUserMembershipsRequest(user_id=world["user"], organization_id=world["org"])
    )
    await membership_service.remove_membership(added.id)
    remaining = await membership_service.get_user_memberships(
        GetUserMembershipsRequest(user_id=world["user"])
    )

    assert [m.id for m in filtered.memberships] == [added.id]
    assert remaining.page.total == 1


@pytest.mark.asyncio
async def test_missing_primary_membership(membership_service: MembershipService, world):
    with pytest.raises(EntityNotFoundError) as exc_info:
        await membership_service.get_primary_membership(world["user"])
    assert exc_info.value.code == ErrorCode.PRIMARY_MEMBERSHIP_NOT_FOUND
