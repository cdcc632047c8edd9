"""Unit tests for the UserProfileService."""

import asyncio
from uuid import uuid4

import pytest

from identity_srv.application.schemas.base import PageRequest
from identity_srv.application.schemas.user import (
    ChangeUserStatusRequest,
    CreateUserRequest,
    ListUsersRequest,
    SearchUsersRequest,
    UnlockUserRequest,
    UpdateUserRequest,
)
from identity_srv.application.services import UserProfileService
from identity_srv.domain.entities import UserMembership, UserProfile, UserStatus
from identity_srv.domain.exceptions import (
    DuplicateEntityError,
    EntityNotFoundError,
    ErrorCode,
    ForbiddenError,
    InternalError,
    InvalidArgumentError,
)


@pytest.mark.asyncio
async def test_create_user_hashes_password_and_activates(user_service: UserProfileService, repos):
    created = await user_service.create_user(
        CreateUserRequest(username=" jdoe ", password="s3cret!", specialties=["cardiology"])
    )

    assert created.username == "jdoe"
    assert created.status == UserStatus.ACTIVE
    assert created.specialties == ["cardiology"]
    stored = await repos.users.get_by_username("jdoe")
    assert stored.password_hash == "hashed:s3cret!"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "request_",
    [
        CreateUserRequest(username="", password="s3cret!"),
        CreateUserRequest(username="ab", password="s3cret!"),
        CreateUserRequest(username="x" * 21, password="s3cret!"),
        CreateUserRequest(username="jdoe", password="12345"),
        CreateUserRequest(username="jdoe", password="p" * 73),
        CreateUserRequest(username="jdoe", password="s3cret!", operator_id="not-a-uuid"),
    ],
)
async def test_create_user_rejects_invalid_input(user_service: UserProfileService, request_):
    with pytest.raises(InvalidArgumentError):
        await user_service.create_user(request_)


@pytest.mark.asyncio
async def test_create_user_rejects_duplicate_username(user_service: UserProfileService):
    await user_service.create_user(CreateUserRequest(username="jdoe", password="s3cret!"))
    with pytest.raises(DuplicateEntityError) as exc_info:
        await user_service.create_user(CreateUserRequest(username="jdoe", password="other!!"))
    assert exc_info.value.code == ErrorCode.USERNAME_ALREADY_EXISTS


@pytest.mark.asyncio
async def test_get_user_not_found(user_service: UserProfileService):
    with pytest.raises(EntityNotFoundError) as exc_info:
        await user_service.get_user(str(uuid4()))
    assert exc_info.value.code == ErrorCode.USER_NOT_FOUND


@pytest.mark.asyncio
async def test_update_user_keeps_absent_fields_and_bumps_version(
    user_service: UserProfileService,
):
    created = await user_service.create_user(
        CreateUserRequest(username="jdoe", password="s3cret!", email="a@example.org", phone="123")
    )

    updated = await user_service.update_user(
        UpdateUserRequest(user_id=created.id, phone="456")
    )

    assert updated.email == "a@example.org"
    assert updated.phone == "456"
    assert updated.version == created.version + 1


@pytest.mark.asyncio
async def test_system_user_cannot_be_deleted(user_service: UserProfileService, repos):
    admin = await repos.users.create(UserProfile(username="admin", is_system_user=True))
    with pytest.raises(ForbiddenError) as exc_info:
        await user_service.delete_user(str(admin.id))
    assert exc_info.value.code == ErrorCode.CANNOT_DELETE_SYSTEM_USER


@pytest.mark.asyncio
async def test_delete_user(user_service: UserProfileService, repos):
    created = await user_service.create_user(CreateUserRequest(username="jdoe", password="s3cret!"))
    await user_service.delete_user(created.id)
    assert await repos.users.get_by_username("jdoe") is None


@pytest.mark.asyncio
async def test_list_users_filters_by_organization_and_status(
    user_service: UserProfileService, repos
):
    org_id = uuid4()
    member = await repos.users.create(UserProfile(username="member", status=UserStatus.ACTIVE))
    await repos.users.create(UserProfile(username="outsider", status=UserStatus.ACTIVE))
    await repos.users.create(UserProfile(username="locked", status=UserStatus.LOCKED))
    await repos.memberships.create(UserMembership(user_id=member.id, organization_id=org_id))

    by_org = await user_service.list_users(ListUsersRequest(organization_id=str(org_id)))
    by_status = await user_service.list_users(ListUsersRequest(status=int(UserStatus.LOCKED)))

    assert [u.username for u in by_org.users] == ["member"]
    assert [u.username for u in by_status.users] == ["locked"]
    assert by_status.page.total == 1


@pytest.mark.asyncio
async def test_search_users_pages_results(user_service: UserProfileService, repos):
    for index in range(3):
        await repos.users.create(UserProfile(username=f"smith{index}", created_at=index))
    await repos.users.create(UserProfile(username="jones"))

    result = await user_service.search_users(
        SearchUsersRequest(search_term="smith", page=PageRequest(page=1, limit=2))
    )

    assert len(result.users) == 2
    assert result.page.total == 3
    assert result.page.has_next is True


@pytest.mark.asyncio
async def test_search_users_requires_term(user_service: UserProfileService):
    with pytest.raises(InvalidArgumentError):
        await user_service.search_users(SearchUsersRequest(search_term="  "))


@pytest.mark.asyncio
async def test_activating_user_resets_login_attempts(user_service: UserProfileService, repos):
    user = await repos.users.create(
        UserProfile(username="jdoe", status=UserStatus.SUSPENDED, login_attempts=2)
    )

    result = await user_service.change_user_status(
        ChangeUserStatusRequest(user_id=str(user.id), new_status=1, reason="back from leave")
    )

    assert result.status == UserStatus.ACTIVE
    assert result.login_attempts is None


@pytest.mark.asyncio
async def test_change_user_status_requires_status(user_service: UserProfileService, repos):
    user = await repos.users.create(UserProfile(username="jdoe"))
    with pytest.raises(InvalidArgumentError):
        await user_service.change_user_status(ChangeUserStatusRequest(user_id=str(user.id)))


@pytest.mark.asyncio
async def test_unlock_user(user_service: UserProfileService, repos):
    user = await repos.users.create(
        UserProfile(username="jdoe", status=UserStatus.LOCKED, login_attempts=5)
    )

    result = await user_service.unlock_user(UnlockUserRequest(user_id=str(user.id)))

    assert result.status == UserStatus.ACTIVE
    stored = await repos.users.get_by_id(user.id)
    assert stored.login_attempts == 0


@pytest.mark.asyncio
async def test_repository_failures_become_internal_errors(user_service: UserProfileService, repos):
    async def broken(user_id):
        raise RuntimeError("connection reset")

    repos.users.get_by_id = broken
    with pytest.raises(InternalError) as exc_info:
        await user_service.get_user(str(uuid4()))
    assert isinstance(exc_info.value.__cause__, RuntimeError)


@pytest.mark.asyncio
async def test_cancellation_is_not_wrapped(user_service: UserProfileService, repos):
    async def cancelled(user_id):
        raise asyncio.CancelledError()

    repos.users.get_by_id = cancelled
    with pytest.raises(asyncio.CancelledError):
        await user_service.get_user(str(uuid4()))
