"""Timestamp parsing and record checks shared by the builders."""

import math
import re
from datetime import UTC, datetime, timedelta, tzinfo

from .models import SessionRecord, Timestamp

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)
_ONE_MILLISECOND = timedelta(milliseconds=1)
_DATE_ONLY = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_timestamp(value: Timestamp | None) -> datetime | None:
    """Parse a record timestamp into an aware datetime.

    Accepts ISO-8601 strings (a trailing ``Z`` included) and datetime
    objects. Date-only strings are read as UTC midnight; naive date-times
    are read in local time.

    Returns:
        Aware datetime, or None if the value cannot be parsed.
    """
    if value is None:
        return None

    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
        if _DATE_ONLY.match(text):
            return parsed.replace(tzinfo=UTC)
    else:
        return None

    if parsed.tzinfo is None:
        try:
            parsed = parsed.astimezone()
        except (OverflowError, OSError, ValueError):
            return None
    return parsed


def to_millis(value: Timestamp | None) -> int | None:
    """Convert a record timestamp to epoch milliseconds, None if invalid."""
    parsed = parse_timestamp(value)
    if parsed is None:
        return None
    try:
        millis = (parsed - _EPOCH) // _ONE_MILLISECOND
    except OverflowError:
        return None
    return millis if math.isfinite(millis) else None


def to_datetime(value: Timestamp | None, tz: tzinfo | None = None) -> datetime | None:
    """Parse a timestamp and express it in ``tz`` (local zone when None)."""
    parsed = parse_timestamp(value)
    if parsed is None:
        return None
    try:
        return parsed.astimezone(tz)
    except (OverflowError, OSError, ValueError):
        return None


def null_fields(record: SessionRecord) -> list[str]:
    """Name the wire fields of a record that are null.

    A null end_time is legitimate (ongoing session) but is still reported,
    since the check is a diagnostic over incoming batches.
    """
    missing: list[str] = []
    if record.instance_label is None:
        missing.append("instance_name")
    if record.category is None:
        missing.append("category_name")
    if record.start_time is None:
        missing.append("start_time")
    if record.end_time is None:
        missing.append("end_time")
    return missing


__all__ = [
    "null_fields",
    "parse_timestamp",
    "to_datetime",
    "to_millis",
]
