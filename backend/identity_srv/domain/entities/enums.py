"""Domain enumerations.

Values match the integers persisted in the database.
"""

from enum import IntEnum


class UserStatus(IntEnum):
    ACTIVE = 1
    INACTIVE = 2
    SUSPENDED = 3
    LOCKED = 4


class RoleStatus(IntEnum):
    ACTIVE = 1
    INACTIVE = 2
    DEPRECATED = 3


class Gender(IntEnum):
    UNKNOWN = 0
    MALE = 1
    FEMALE = 2


class MembershipStatus(IntEnum):
    ACTIVE = 1
    PENDING = 2
    SUSPENDED = 3
    ENDED = 4


class LogoStatus(IntEnum):
    TEMPORARY = 0
    BOUND = 1
    DELETED = 2
