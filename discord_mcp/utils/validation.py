"""Parameter validation shared by all tool families.

Every helper raises ``InvalidArgumentError`` naming the offending parameter;
none of them fall back to a default on malformed input.
"""

from __future__ import annotations

from ..exceptions import InvalidArgumentError
from ..lookup import is_snowflake

MAX_MESSAGE_COUNT = 100
AUTO_ARCHIVE_DURATIONS = (60, 1440, 4320, 10080)
_TRUE_VALUES = {"true", "yes", "1", "on"}
_FALSE_VALUES = {"false", "no", "0", "off"}


def require(value: str | None, field: str) -> str:
    """Return ``value`` unless it is missing or empty."""
    if value is None or value == "":
        raise InvalidArgumentError(f"{field} cannot be null or empty", field=field)
    return value


def parse_snowflake(value: str | None, field: str) -> int:
    """Validate a required Discord ID parameter and return it as an integer."""
    value = require(value, field).strip()
    if not is_snowflake(value):
        raise InvalidArgumentError(f"{field} must be a numeric Discord ID", field=field, value=value)
    return int(value)


def check_count(count: int | None, default: int, field: str = "count") -> int:
    """Validate an optional message count, which must lie in 1..100."""
    if count is None:
        return default
    if isinstance(count, bool) or not isinstance(count, int):
        raise InvalidArgumentError(f"{field} must be an integer", field=field, value=count)
    if not 1 <= count <= MAX_MESSAGE_COUNT:
        raise InvalidArgumentError(
            f"{field} must be between 1 and {MAX_MESSAGE_COUNT}", field=field, value=count
        )
    return count


def parse_bool(value: bool | str | None, field: str, default: bool | None = None) -> bool:
    """Accept a boolean or one of true/false, yes/no, on/off, 1/0."""
    if value is None or value == "":
        if default is None:
            raise InvalidArgumentError(f"{field} cannot be null or empty", field=field)
        return default
    if isinstance(value, bool):
        return value
    normalized = str(value).strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise InvalidArgumentError(f"{field} must be true or false", field=field, value=value)


def check_auto_archive(minutes: int | None) -> int | None:
    """Validate an auto-archive duration against the values Discord accepts."""
    if minutes is None:
        return None
    if minutes not in AUTO_ARCHIVE_DURATIONS:
        allowed = ", ".join(str(d) for d in AUTO_ARCHIVE_DURATIONS)
        raise InvalidArgumentError(
            f"auto_archive_minutes must be one of {allowed}", field="auto_archive_minutes", value=minutes
        )
    return minutes


def split_names(value: str | None) -> list[str]:
    """Split a comma-separated list, dropping blanks."""
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]
