"""Helpers between plain scalars and their optional wire form.

The service treats an empty string (and a zero number) as "not set": these
collapse to ``None`` on the way out, and ``None`` unboxes back to the zero
value. Whitespace-only strings are *not* special-cased here.
"""

import json
import logging

logger = logging.getLogger(__name__)


def box_string(value: str) -> str | None:
    return value if value != "" else None


def unbox_string(value: str | None) -> str:
    return value if value is not None else ""


def box_int32(value: int) -> int | None:
    return value if value != 0 else None


def unbox_int32(value: int | None) -> int:
    return value if value is not None else 0


def box_int64(value: int) -> int | None:
    return value if value != 0 else None


def unbox_int64(value: int | None) -> int:
    return value if value is not None else 0


def box_bool(value: bool) -> bool:
    return value


def unbox_bool(value: bool | None) -> bool:
    return bool(value) if value is not None else False


def trim_space(value: str) -> str:
    return value.strip()


def is_blank(value: str) -> bool:
    return value.strip() == ""


def encode_string_list(values: list[str] | None) -> str:
    """Serialize a list of strings as a compact JSON array.

    The empty list is stored as ``""`` rather than ``"[]"``. Encoding failures
    degrade to ``""``.
    """
    if not values:
        return ""
    try:
        return json.dumps(list(values), separators=(",", ":"), ensure_ascii=False)
    except (TypeError, ValueError) as exc:
        logger.warning("Could not encode string list: %s", exc)
        return ""


def decode_string_list(raw: str | None) -> list[str] | None:
    """Parse a persisted JSON array of strings.

    Returns ``None`` for empty input, malformed JSON, or a document that is
    not a list of strings.
    """
    if not raw:
        return None
    try:
        decoded = json.loads(raw)
    except ValueError:
        logger.debug("Ignoring malformed string list %r", raw)
        return None
    if not isinstance(decoded, list) or not all(isinstance(item, str) for item in decoded):
        return None
    return decoded
