"""Projection between ``UserProfile`` and its wire records."""

import dataclasses
from uuid import UUID, uuid4

from identity_srv.application.converters.enum_converter import EnumConverter
from identity_srv.application.converters.identifiers import format_id
from identity_srv.application.converters.value_boxing import (
    box_int32,
    box_int64,
    box_string,
    unbox_bool,
    unbox_string,
)
from identity_srv.application.schemas.user import (
    CreateUserRequest,
    UpdateUserRequest,
    UserProfileSchema,
)
from identity_srv.domain.entities.common import now_millis
from identity_srv.domain.entities.enums import Gender, UserStatus
from identity_srv.domain.entities.user_profile import UserProfile


class UserProfileConverter:

    def __init__(self, enum_converter: EnumConverter):
        self._enums = enum_converter

    def model_to_wire(self, user: UserProfile | None) -> UserProfileSchema | None:
        if user is None:
            return None
        return UserProfileSchema(
            id=format_id(user.id),
            username=user.username,
            email=box_string(user.email),
            phone=box_string(user.phone),
            first_name=box_string(user.first_name),
            last_name=box_string(user.last_name),
            real_name=box_string(user.real_name),
            gender=self._enums.gender_to_wire(user.gender) if user.gender != Gender.UNKNOWN else None,
            professional_title=box_string(user.professional_title),
            license_number=box_string(user.license_number),
            specialties=list(user.specialties) or None,
            employee_id=box_string(user.employee_id),
            status=self._enums.user_status_to_wire(user.status),
            login_attempts=box_int32(user.login_attempts),
            must_change_password=user.must_change_password,
            is_system_user=user.is_system_user,
            account_expiry=box_int64(user.account_expiry or 0),
            created_by=format_id(user.created_by),
            updated_by=format_id(user.updated_by),
            last_login_time=box_int64(user.last_login_time or 0),
            version=user.version,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )

    def models_to_wire(self, users: list[UserProfile] | None) -> list[UserProfileSchema]:
        return [self.model_to_wire(u) for u in users or []]

    def create_request_to_model(
        self, request: CreateUserRequest, password_hash: str, actor_id: UUID | None
    ) -> UserProfile:
        """Build a new active user; the password arrives already hashed."""
        now = now_millis()
        return UserProfile(
            id=uuid4(),
            username=unbox_string(request.username).strip(),
            password_hash=password_hash,
            email=unbox_string(request.email),
            phone=unbox_string(request.phone),
            first_name=unbox_string(request.first_name),
            last_name=unbox_string(request.last_name),
            real_name=unbox_string(request.real_name),
            gender=self._enums.gender_to_model(request.gender),
            professional_title=unbox_string(request.professional_title),
            license_number=unbox_string(request.license_number),
            specialties=list(request.specialties or []),
            employee_id=unbox_string(request.employee_id),
            status=UserStatus.ACTIVE,
            must_change_password=unbox_bool(request.must_change_password),
            account_expiry=request.account_expiry or None,
            created_by=actor_id,
            updated_by=actor_id,
            created_at=now,
            updated_at=now,
        )

    def apply_update(
        self, existing: UserProfile, request: UpdateUserRequest, actor_id: UUID | None
    ) -> UserProfile:
        user = dataclasses.replace(existing)
        for name in (
            "email",
            "phone",
            "first_name",
            "last_name",
            "real_name",
            "professional_title",
            "license_number",
            "employee_id",
        ):
            value = getattr(request, name)
            if value is not None:
                setattr(user, name, value)
        if request.gender is not None:
            user.gender = self._enums.gender_to_model(request.gender)
        if request.specialties is not None:
            user.specialties = list(request.specialties)
        if request.account_expiry is not None:
            user.account_expiry = request.account_expiry or None
        user.updated_by = actor_id
        user.updated_at = now_millis()
        return user
