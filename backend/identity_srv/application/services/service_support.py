"""Validation and error-translation helpers shared by the facades."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from uuid import UUID

from identity_srv.domain.exceptions import IdentityServiceError, InternalError, InvalidArgumentError

logger = logging.getLogger(__name__)


def require_id(value: str | None, field_name: str) -> UUID:
    """Parse a mandatory identifier or raise ``InvalidArgumentError``."""
    if value is None or not value.strip():
        raise InvalidArgumentError(f"{field_name} is required")
    try:
        return UUID(value.strip())
    except ValueError as exc:
        raise InvalidArgumentError(f"{field_name} is not a valid identifier: {value!r}") from exc


def optional_id(value: str | None, field_name: str) -> UUID | None:
    """Parse an identifier that may be absent; malformed text is still an error."""
    if value is None or not value.strip():
        return None
    return require_id(value, field_name)


def require_text(value: str | None, field_name: str) -> str:
    if value is None or not value.strip():
        raise InvalidArgumentError(f"{field_name} is required")
    return value.strip()


@contextmanager
def translate_errors(action: str) -> Iterator[None]:
    """Map collaborator failures onto the service error taxonomy.

    Service errors pass through untouched; anything else becomes an
    ``InternalError`` chained to the original exception. Cancellation is a
    ``BaseException`` and is never intercepted.
    """
    try:
        yield
    except IdentityServiceError:
        raise
    except Exception as exc:
        logger.exception("%s failed", action)
        raise InternalError(f"{action} failed: {exc}") from exc
