"""Bidirectional mapping between domain enumerations and their wire integers.

Both directions are total: a domain value without a wire counterpart becomes
``UNSPECIFIED``; an unknown or unspecified wire value falls back to the
domain's default for that enumeration.
"""

from enum import IntEnum
from typing import TypeVar

from identity_srv.application.schemas.enums import (
    WireGender,
    WireLogoStatus,
    WireMembershipStatus,
    WireRoleStatus,
    WireUserStatus,
)
from identity_srv.domain.entities.enums import (
    Gender,
    LogoStatus,
    MembershipStatus,
    RoleStatus,
    UserStatus,
)

_M = TypeVar("_M", bound=IntEnum)
_W = TypeVar("_W", bound=IntEnum)


def _to_wire(value: object, wire_type: type[_W], unspecified: _W) -> _W:
    if isinstance(value, IntEnum):
        try:
            return wire_type[value.name]
        except KeyError:
            return unspecified
    return unspecified


def _to_model(value: int | None, wire_type: type[_W], model_type: type[_M], fallback: _M) -> _M:
    if value is None:
        return fallback
    try:
        wire_value = wire_type(value)
    except ValueError:
        return fallback
    try:
        return model_type[wire_value.name]
    except KeyError:
        return fallback


class EnumConverter:
    """Enum mapping for every enumerated field the projectors handle."""

    def user_status_to_wire(self, status: UserStatus) -> WireUserStatus:
        return _to_wire(status, WireUserStatus, WireUserStatus.UNSPECIFIED)

    def user_status_to_model(self, status: int | None) -> UserStatus:
        return _to_model(status, WireUserStatus, UserStatus, UserStatus.INACTIVE)

    def role_status_to_wire(self, status: RoleStatus) -> WireRoleStatus:
        return _to_wire(status, WireRoleStatus, WireRoleStatus.UNSPECIFIED)

    def role_status_to_model(self, status: int | None) -> RoleStatus:
        return _to_model(status, WireRoleStatus, RoleStatus, RoleStatus.INACTIVE)

    def gender_to_wire(self, gender: Gender) -> WireGender:
        return _to_wire(gender, WireGender, WireGender.UNKNOWN)

    def gender_to_model(self, gender: int | None) -> Gender:
        return _to_model(gender, WireGender, Gender, Gender.UNKNOWN)

    def membership_status_to_wire(self, status: MembershipStatus) -> WireMembershipStatus:
        return _to_wire(status, WireMembershipStatus, WireMembershipStatus.UNSPECIFIED)

    def membership_status_to_model(self, status: int | None) -> MembershipStatus:
        return _to_model(status, WireMembershipStatus, MembershipStatus, MembershipStatus.PENDING)

    def logo_status_to_wire(self, status: LogoStatus) -> WireLogoStatus:
        return _to_wire(status, WireLogoStatus, WireLogoStatus.UNSPECIFIED)

    def logo_status_to_model(self, status: int | None) -> LogoStatus:
        return _to_model(status, WireLogoStatus, LogoStatus, LogoStatus.TEMPORARY)
