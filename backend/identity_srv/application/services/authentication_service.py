"""Authentication and password management.

Login verifies credentials and account state, then assembles everything the
client needs for its first screen: profile, active memberships, the user's
active role ids and the menu tree those roles may see. Token issuance is the
gateway's job.
"""

import logging
from uuid import UUID

from identity_srv.application.converters import Converter
from identity_srv.application.interfaces import (
    MembershipRepository,
    PasswordHasher,
    UserProfileRepository,
)
from identity_srv.application.schemas.auth import (
    ChangePasswordRequest,
    ForcePasswordChangeRequest,
    LoginRequest,
    LoginResponse,
    ResetPasswordRequest,
)
from identity_srv.application.schemas.base import OperationStatusResponse
from identity_srv.application.services.menu_service import MenuService
from identity_srv.application.services.service_support import (
    optional_id,
    require_id,
    require_text,
    translate_errors,
)
from identity_srv.application.services.user_profile_service import validate_password
from identity_srv.domain.entities import UserProfile, UserStatus, now_millis
from identity_srv.domain.exceptions import (
    EntityNotFoundError,
    ErrorCode,
    ForbiddenError,
    InvalidArgumentError,
)

logger = logging.getLogger(__name__)


class AuthenticationService:

    def __init__(
        self,
        user_repository: UserProfileRepository,
        membership_repository: MembershipRepository,
        menu_service: MenuService,
        password_hasher: PasswordHasher,
        converter: Converter,
        *,
        max_login_attempts: int = 5,
    ):
        self._users = user_repository
        self._memberships = membership_repository
        self._menus = menu_service
        self._hasher = password_hasher
        self._converter = converter
        self._max_login_attempts = max_login_attempts

    async def login(self, request: LoginRequest) -> LoginResponse:
        username = require_text(request.username, "username")
        if not request.password:
            raise InvalidArgumentError("password is required")

        with translate_errors("login"):
            user = await self._users.get_by_username(username)
            if user is None:
                raise EntityNotFoundError("UserProfile", username, ErrorCode.USER_NOT_FOUND)
            if user.is_locked():
                raise ForbiddenError(f"User '{username}' is locked", ErrorCode.USER_LOCKED)

            if not self._hasher.verify(request.password, user.password_hash):
                attempts = await self._users.record_failed_login(
                    user.id, self._max_login_attempts
                )
                logger.warning("Failed login for %s (attempt %d)", username, attempts)
                raise InvalidArgumentError(
                    "Invalid username or password", ErrorCode.INVALID_CREDENTIALS
                )

            self._check_account_state(user)

            memberships = [m for m in await self._memberships.list_by_user(user.id) if m.is_active()]
            role_ids, menu_tree = await self._menus.menu_tree_for_user(user.id)
            if not role_ids:
                raise ForbiddenError(
                    f"User '{username}' has no active roles", ErrorCode.NO_ACTIVE_ROLES
                )

            await self._record_successful_login(user)

        logger.info("User %s logged in with %d role(s)", username, len(role_ids))
        return self._converter.build_login_response(user, memberships, menu_tree, role_ids)

    async def change_password(self, request: ChangePasswordRequest) -> OperationStatusResponse:
        user_id = require_id(request.user_id, "user_id")
        if not request.old_password:
            raise InvalidArgumentError("old_password is required")
        new_password = validate_password(request.new_password, "new_password")

        with translate_errors("change password"):
            user = await self._get_or_raise(user_id)
            if not self._hasher.verify(request.old_password, user.password_hash):
                raise InvalidArgumentError(
                    "Current password is incorrect", ErrorCode.PASSWORD_MISMATCH
                )
            user.password_hash = self._hasher.hash(new_password)
            user.must_change_password = False
            user.updated_by = user.id
            user.updated_at = now_millis()
            await self._users.update(user)

        logger.info("User %s changed their password", user_id)
        return OperationStatusResponse(success=True, message="Password changed")

    async def reset_password(self, request: ResetPasswordRequest) -> OperationStatusResponse:
        """Administrative reset: the user must choose a new password on next login."""
        user_id = require_id(request.user_id, "user_id")
        new_password = validate_password(request.new_password, "new_password")
        actor_id = optional_id(request.operator_id, "operator_id")

        with translate_errors("reset password"):
            user = await self._get_or_raise(user_id)
            user.password_hash = self._hasher.hash(new_password)
            user.must_change_password = True
            user.login_attempts = 0
            if user.is_locked():
                user.status = UserStatus.ACTIVE
            user.updated_by = actor_id
            user.updated_at = now_millis()
            await self._users.update(user)

        logger.info("Password of user %s was reset", user_id)
        return OperationStatusResponse(success=True, message="Password reset")

    async def force_password_change(
        self, request: ForcePasswordChangeRequest
    ) -> OperationStatusResponse:
        user_id = require_id(request.user_id, "user_id")
        actor_id = optional_id(request.operator_id, "operator_id")

        with translate_errors("force password change"):
            user = await self._get_or_raise(user_id)
            user.must_change_password = True
            user.updated_by = actor_id
            user.updated_at = now_millis()
            await self._users.update(user)

        return OperationStatusResponse(success=True, message="Password change required")

    # ── Helpers ──────────────────────────────────────────────────────

    @staticmethod
    def _check_account_state(user: UserProfile) -> None:
        if user.status == UserStatus.INACTIVE:
            raise ForbiddenError(f"User '{user.username}' is inactive", ErrorCode.USER_INACTIVE)
        if user.status == UserStatus.SUSPENDED:
            raise ForbiddenError(f"User '{user.username}' is suspended", ErrorCode.USER_SUSPENDED)
        if user.is_expired():
            raise ForbiddenError(f"Account '{user.username}' has expired", ErrorCode.ACCOUNT_EXPIRED)
        if user.must_change_password:
            raise ForbiddenError(
                f"User '{user.username}' must change their password",
                ErrorCode.MUST_CHANGE_PASSWORD,
            )

    async def _record_successful_login(self, user: UserProfile) -> None:
        user.login_attempts = 0
        user.last_login_time = now_millis()
        await self._users.update(user)

    async def _get_or_raise(self, user_id: UUID) -> UserProfile:
        user = await self._users.get_by_id(user_id)
        if user is None:
            raise EntityNotFoundError("UserProfile", user_id, ErrorCode.USER_NOT_FOUND)
        return user
