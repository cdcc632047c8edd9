"""Conversion between UUIDs and their canonical textual form."""

from uuid import UUID


def format_id(value: UUID | None) -> str | None:
    """Canonical text for an identifier; ``None`` stays absent."""
    return str(value) if value is not None else None


def parse_id(value: str | None) -> UUID | None:
    """Parse an identifier leniently; blank or malformed text yields ``None``."""
    if value is None:
        return None
    text = value.strip()
    if not text:
        return None
    try:
        return UUID(text)
    except ValueError:
        return None


def format_ids(values: list[UUID]) -> list[str]:
    return [str(value) for value in values]
