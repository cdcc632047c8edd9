"""Domain-specific exceptions — framework-independent.

Every error raised by the service carries a ``kind`` (the coarse taxonomy the
transport maps onto status codes) and a numeric ``code`` from the service's
errno table.
"""

from enum import Enum


class ErrorKind(str, Enum):
    INVALID_ARGUMENT = "invalid_argument"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    FORBIDDEN = "forbidden"
    INTERNAL = "internal"


class ErrorCode:
    """Numeric error codes grouped by business area."""

    INVALID_PARAMS = 200100
    OPERATION_FAILED = 200101

    # Users & authentication (201xxx)
    USER_NOT_FOUND = 201001
    USER_ALREADY_EXISTS = 201002
    USERNAME_ALREADY_EXISTS = 201003
    INVALID_CREDENTIALS = 201004
    USER_INACTIVE = 201005
    USER_SUSPENDED = 201006
    USER_LOCKED = 201007
    ACCOUNT_EXPIRED = 201008
    MUST_CHANGE_PASSWORD = 201009
    NO_ACTIVE_ROLES = 201010
    CANNOT_DELETE_SYSTEM_USER = 201011
    PASSWORD_MISMATCH = 201012

    # Organizations (202xxx)
    ORGANIZATION_NOT_FOUND = 202001
    ORGANIZATION_CODE_EXISTS = 202002
    ORGANIZATION_HAS_DEPARTMENTS = 202003
    ORGANIZATION_HAS_MEMBERS = 202004
    INVALID_ORGANIZATION_HIERARCHY = 202005
    PARENT_ORGANIZATION_NOT_FOUND = 202006
    ORGANIZATION_HAS_CHILDREN = 202007

    # Departments (203xxx)
    DEPARTMENT_NOT_FOUND = 203001
    DEPARTMENT_NAME_EXISTS = 203002
    DEPARTMENT_HAS_MEMBERS = 203003

    # Memberships (204xxx)
    MEMBERSHIP_NOT_FOUND = 204001
    MEMBERSHIP_ALREADY_EXISTS = 204002
    PRIMARY_MEMBERSHIP_NOT_FOUND = 204003

    # Logos (206xxx)
    LOGO_NOT_FOUND = 206001
    LOGO_EXPIRED = 206002
    LOGO_ALREADY_BOUND = 206003
    LOGO_INVALID_FILE = 206004
    LOGO_STORAGE_FAILED = 206005

    # Roles & menus (207xxx)
    ROLE_NOT_FOUND = 207001
    ROLE_NAME_EXISTS = 207002
    SYSTEM_ROLE_IMMUTABLE = 207003
    ROLE_IN_USE = 207004
    ROLE_ASSIGNMENT_NOT_FOUND = 207005
    ROLE_ALREADY_ASSIGNED = 207006
    MENU_NOT_FOUND = 207010
    MENU_INVALID_CONFIG = 207011


class IdentityServiceError(Exception):
    """Base class for all errors surfaced by the identity service."""

    kind: ErrorKind = ErrorKind.INTERNAL
    default_code: int = ErrorCode.OPERATION_FAILED

    def __init__(self, message: str, code: int | None = None):
        self.message = message
        self.code = code if code is not None else self.default_code
        super().__init__(message)


class InvalidArgumentError(IdentityServiceError):
    """A required field is missing or a value cannot be parsed."""

    kind = ErrorKind.INVALID_ARGUMENT
    default_code = ErrorCode.INVALID_PARAMS


class EntityNotFoundError(IdentityServiceError):
    """Raised when a requested entity does not exist."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, entity_type: str, entity_id: object, code: int | None = None):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found", code)


class ConflictError(IdentityServiceError):
    """The operation conflicts with the current state of the data."""

    kind = ErrorKind.CONFLICT


class DuplicateEntityError(ConflictError):
    """Raised when attempting to create a duplicate entity."""

    def __init__(self, entity_type: str, field: str, value: str, code: int | None = None):
        self.entity_type = entity_type
        self.field = field
        self.value = value
        super().__init__(f"{entity_type} with {field}='{value}' already exists", code)


class ForbiddenError(IdentityServiceError):
    """The caller is not permitted to perform the operation."""

    kind = ErrorKind.FORBIDDEN


class InternalError(IdentityServiceError):
    """Unclassified failure of a collaborator."""

    kind = ErrorKind.INTERNAL
