"""Shared parsing helpers for payload decoding.

to_level:        -1 / missing / garbage → None, otherwise the int level
parse_date:      returns None on bad input (ISO or DD.MM.YYYY)
parse_datetime:  returns None on bad input (ISO, trailing "Z" accepted)
as_list:         list or id-keyed mapping → list of values
text_field:      optional string member, ValidationError on any other type
"""
from datetime import date, datetime

from dad.core.exceptions import ValidationError

NOT_APPLICABLE = -1


def to_level(value):
    """Decode a progress/goal level from its wire form.

    The backend stores "not applicable" as ``-1``. Any negative number,
    ``None``, a boolean, a fractional number, or something that is not an
    integer decodes to ``None``; everything else is returned as an ``int``.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float) and not value.is_integer():
        return None
    try:
        level = int(value)
    except (TypeError, ValueError):
        return None
    return level if level >= 0 else None


def from_level(level):
    """Encode a level back to its wire form (``None`` → ``-1``)."""
    return NOT_APPLICABLE if level is None else level


def parse_date(value):
    """Parse a date string (ISO or DD.MM.YYYY) to a date object.

    Returns None for empty/invalid input. Supports:
    - YYYY-MM-DD (ISO format)
    - YYYY-MM-DDTHH:MM:SS[Z] (datetime ISO → .date())
    - DD.MM.YYYY
    """
    if not value:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value))
    except (ValueError, TypeError):
        pass
    parsed = parse_datetime(value)
    if parsed is not None:
        return parsed.date()
    try:
        return datetime.strptime(str(value), "%d.%m.%Y").date()
    except (ValueError, TypeError):
        return None


def parse_datetime(value):
    """Parse an ISO datetime string; returns None for empty/invalid input."""
    if not value:
        return None
    if isinstance(value, datetime):
        return value
    text = str(value)
    # Go's encoding/json writes RFC 3339 with a trailing Z
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except (ValueError, TypeError):
        return None


def as_list(items):
    """Accept either a list or an id-keyed mapping and return a list."""
    if items is None:
        return []
    if isinstance(items, dict):
        return list(items.values())
    return list(items)


def text_field(payload, key, resource, default=""):
    """Return ``payload[key]`` as a string; missing, null and "" give ``default``.

    Raises:
        ValidationError: the member is present but not a string.
    """
    value = payload.get(key)
    if value is None or value == "":
        return default
    if not isinstance(value, str):
        raise ValidationError(
            f"{resource}.{key} must be a string",
            details={key: f"expected string, got {type(value).__name__}"},
        )
    return value
