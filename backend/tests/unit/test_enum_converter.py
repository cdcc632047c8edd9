"""Unit tests for enum mapping between domain and wire integers."""

import pytest

from identity_srv.application.converters import EnumConverter
from identity_srv.application.schemas.enums import WireLogoStatus, WireUserStatus
from identity_srv.domain.entities import Gender, LogoStatus, MembershipStatus, RoleStatus, UserStatus


@pytest.fixture
def enums() -> EnumConverter:
    return EnumConverter()


@pytest.mark.parametrize("status", list(UserStatus))
def test_user_status_maps_both_ways(enums: EnumConverter, status: UserStatus):
    assert enums.user_status_to_model(int(enums.user_status_to_wire(status))) == status


def test_unknown_wire_values_fall_back_to_defaults(enums: EnumConverter):
    assert enums.user_status_to_model(0) == UserStatus.INACTIVE
    assert enums.user_status_to_model(99) == UserStatus.INACTIVE
    assert enums.role_status_to_model(None) == RoleStatus.INACTIVE
    assert enums.membership_status_to_model(0) == MembershipStatus.PENDING
    assert enums.gender_to_model(7) == Gender.UNKNOWN
    assert enums.logo_status_to_model(-1) == LogoStatus.TEMPORARY


def test_non_enum_domain_value_maps_to_unspecified(enums: EnumConverter):
    assert enums.user_status_to_wire(None) == WireUserStatus.UNSPECIFIED
    assert enums.logo_status_to_wire(None) == WireLogoStatus.UNSPECIFIED


def test_logo_status_keeps_its_wire_values(enums: EnumConverter):
    assert enums.logo_status_to_wire(LogoStatus.TEMPORARY) == 0
    assert enums.logo_status_to_wire(LogoStatus.BOUND) == 1
