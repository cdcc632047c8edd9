"""Application service (use case) for UserProfile operations."""

import logging
from uuid import UUID

from identity_srv.application.converters import (
    EnumConverter,
    UserProfileConverter,
    page_request_to_query_options,
    page_result_to_response,
)
from identity_srv.application.interfaces import PasswordHasher, UserProfileRepository
from identity_srv.application.schemas.user import (
    ChangeUserStatusRequest,
    CreateUserRequest,
    ListUsersRequest,
    SearchUsersRequest,
    UnlockUserRequest,
    UpdateUserRequest,
    UserListResponse,
    UserProfileSchema,
)
from identity_srv.application.services.service_support import (
    optional_id,
    require_id,
    require_text,
    translate_errors,
)
from identity_srv.domain.entities import UserProfile, UserStatus, now_millis
from identity_srv.domain.exceptions import (
    DuplicateEntityError,
    EntityNotFoundError,
    ErrorCode,
    ForbiddenError,
    InvalidArgumentError,
)

logger = logging.getLogger(__name__)

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 20
PASSWORD_MIN_LENGTH = 6
# bcrypt only looks at the first 72 bytes
PASSWORD_MAX_BYTES = 72


def validate_password(password: str | None, field_name: str = "password") -> str:
    if password is None or password == "":
        raise InvalidArgumentError(f"{field_name} is required")
    if len(password) < PASSWORD_MIN_LENGTH:
        raise InvalidArgumentError(
            f"{field_name} must be at least {PASSWORD_MIN_LENGTH} characters"
        )
    if len(password.encode("utf-8")) > PASSWORD_MAX_BYTES:
        raise InvalidArgumentError(f"{field_name} must be at most {PASSWORD_MAX_BYTES} bytes")
    return password


class UserProfileService:
    """Orchestrates user account CRUD, search and status changes."""

    def __init__(
        self,
        repository: UserProfileRepository,
        password_hasher: PasswordHasher,
        converter: UserProfileConverter,
        enum_converter: EnumConverter,
    ):
        self._repository = repository
        self._hasher = password_hasher
        self._converter = converter
        self._enums = enum_converter

    async def create_user(self, request: CreateUserRequest) -> UserProfileSchema:
        username = require_text(request.username, "username")
        if not USERNAME_MIN_LENGTH <= len(username) <= USERNAME_MAX_LENGTH:
            raise InvalidArgumentError(
                f"username must be {USERNAME_MIN_LENGTH}-{USERNAME_MAX_LENGTH} characters"
            )
        password = validate_password(request.password)
        actor_id = optional_id(request.operator_id, "operator_id")

        with translate_errors("create user"):
            if await self._repository.get_by_username(username) is not None:
                raise DuplicateEntityError(
                    "UserProfile", "username", username, ErrorCode.USERNAME_ALREADY_EXISTS
                )
            user = self._converter.create_request_to_model(
                request, self._hasher.hash(password), actor_id
            )
            created = await self._repository.create(user)

        logger.info("Created user %s (%s)", created.id, created.username)
        return self._converter.model_to_wire(created)

    async def get_user(self, user_id: str | None) -> UserProfileSchema:
        parsed_id = require_id(user_id, "user_id")
        with translate_errors("get user"):
            user = await self._get_or_raise(parsed_id)
        return self._converter.model_to_wire(user)

    async def update_user(self, request: UpdateUserRequest) -> UserProfileSchema:
        user_id = require_id(request.user_id, "user_id")
        actor_id = optional_id(request.operator_id, "operator_id")

        with translate_errors("update user"):
            existing = await self._get_or_raise(user_id)
            updated = self._converter.apply_update(existing, request, actor_id)
            updated.version = existing.version + 1
            saved = await self._repository.update(updated)

        return self._converter.model_to_wire(saved)

    async def delete_user(self, user_id: str | None) -> None:
        parsed_id = require_id(user_id, "user_id")

        with translate_errors("delete user"):
            user = await self._get_or_raise(parsed_id)
            if not user.can_delete():
                raise ForbiddenError(
                    f"System user '{user.username}' cannot be deleted",
                    ErrorCode.CANNOT_DELETE_SYSTEM_USER,
                )
            await self._repository.delete(parsed_id)

        logger.info("Deleted user %s", parsed_id)

    async def list_users(self, request: ListUsersRequest) -> UserListResponse:
        organization_id = optional_id(request.organization_id, "organization_id")
        status = (
            self._enums.user_status_to_model(request.status)
            if request.status is not None
            else None
        )
        options = page_request_to_query_options(request.page)

        with translate_errors("list users"):
            users, page = await self._repository.find(
                options, organization_id=organization_id, status=status
            )

        return UserListResponse(
            users=self._converter.models_to_wire(users),
            page=page_result_to_response(page),
        )

    async def search_users(self, request: SearchUsersRequest) -> UserListResponse:
        term = require_text(request.search_term, "search_term")
        options = page_request_to_query_options(request.page).with_search(term)

        with translate_errors("search users"):
            users, page = await self._repository.find(options)

        return UserListResponse(
            users=self._converter.models_to_wire(users),
            page=page_result_to_response(page),
        )

    async def change_user_status(self, request: ChangeUserStatusRequest) -> UserProfileSchema:
        user_id = require_id(request.user_id, "user_id")
        if request.new_status is None:
            raise InvalidArgumentError("new_status is required")
        new_status = self._enums.user_status_to_model(request.new_status)
        actor_id = optional_id(request.operator_id, "operator_id")

        with translate_errors("change user status"):
            user = await self._get_or_raise(user_id)
            old_status = user.status
            user.status = new_status
            if new_status == UserStatus.ACTIVE:
                user.login_attempts = 0
            user.updated_by = actor_id
            user.updated_at = now_millis()
            saved = await self._repository.update(user)

        logger.info(
            "User %s status %s -> %s (%s)",
            user_id, old_status.name, new_status.name, request.reason or "no reason given",
        )
        return self._converter.model_to_wire(saved)

    async def unlock_user(self, request: UnlockUserRequest) -> UserProfileSchema:
        user_id = require_id(request.user_id, "user_id")
        actor_id = optional_id(request.operator_id, "operator_id")

        with translate_errors("unlock user"):
            user = await self._get_or_raise(user_id)
            if user.is_locked():
                user.status = UserStatus.ACTIVE
            user.login_attempts = 0
            user.updated_by = actor_id
            user.updated_at = now_millis()
            saved = await self._repository.update(user)

        logger.info("Unlocked user %s", user_id)
        return self._converter.model_to_wire(saved)

    async def _get_or_raise(self, user_id: UUID) -> UserProfile:
        user = await self._repository.get_by_id(user_id)
        if user is None:
            raise EntityNotFoundError("UserProfile", user_id, ErrorCode.USER_NOT_FOUND)
        return user
