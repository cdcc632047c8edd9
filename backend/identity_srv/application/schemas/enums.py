"""Wire encodings of the domain enumerations.

Each wire enum reserves a distinguished ``UNSPECIFIED`` value used when a
domain value has no wire counterpart.
"""

from enum import IntEnum


class WireUserStatus(IntEnum):
    UNSPECIFIED = 0
    ACTIVE = 1
    INACTIVE = 2
    SUSPENDED = 3
    LOCKED = 4


class WireRoleStatus(IntEnum):
    UNSPECIFIED = 0
    ACTIVE = 1
    INACTIVE = 2
    DEPRECATED = 3


class WireGender(IntEnum):
    UNKNOWN = 0
    MALE = 1
    FEMALE = 2


class WireMembershipStatus(IntEnum):
    UNSPECIFIED = 0
    ACTIVE = 1
    PENDING = 2
    SUSPENDED = 3
    ENDED = 4


class WireLogoStatus(IntEnum):
    UNSPECIFIED = -1
    TEMPORARY = 0
    BOUND = 1
    DELETED = 2
