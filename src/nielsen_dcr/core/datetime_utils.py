"""UTC datetime utilities.

This module provides the date parsing and formatting used when building
Nielsen metadata. All output is UTC.
"""

import time
from datetime import datetime, timezone

# Nielsen DCR airdate format (yyyyMMdd HH:mm:ss)
NIELSEN_AIRDATE_FORMAT = "%Y%m%d %H:%M:%S"

SIMPLE_DATE_FORMAT = "%Y-%m-%d"
SIMPLE_DATE_LENGTH = 10


def parse_iso_timestamp(timestamp: str) -> datetime:
    """Parse ISO-8601 timestamp, handling both Z and +00:00 suffixes.

    Args:
        timestamp: ISO-8601 timestamp string (e.g., "2019-08-30T21:00:00Z").

    Returns:
        Timezone-aware datetime object (always UTC if no offset specified).

    Raises:
        ValueError: If the string is not a valid ISO-8601 timestamp.

    Note:
        Python 3.10 requires explicit +00:00 offset for fromisoformat(),
        so this function normalizes Z suffix to +00:00.
        Naive datetime strings (no timezone) are assumed to be UTC.
    """
    normalized = timestamp.replace("Z", "+00:00")
    dt = datetime.fromisoformat(normalized)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def parse_simple_date(value: str) -> datetime:
    """Parse a YYYY-MM-DD date as midnight UTC.

    Raises:
        ValueError: If the string is not a valid date.
    """
    return datetime.strptime(value, SIMPLE_DATE_FORMAT).replace(tzinfo=timezone.utc)


def is_iso_timestamp(value: str) -> bool:
    """True if value looks like an ISO-8601 timestamp (has a T separator)."""
    return len(value.split("T")) > 1


def is_simple_date(value: str) -> bool:
    """True if value looks like a YYYY-MM-DD date."""
    return len(value.split("-")) > 2 and len(value) == SIMPLE_DATE_LENGTH


def format_airdate(raw: str | None) -> str:
    """Normalize an airdate to the Nielsen ``yyyyMMdd HH:mm:ss`` format.

    Accepts ISO-8601 timestamps ("2019-08-30T21:00:00Z") and simple dates
    ("2019-08-30"). This is a best-effort normalizer: anything that cannot
    be parsed is returned unchanged so downstream consumers always receive
    a string.

    Args:
        raw: Airdate string from event properties, or None.

    Returns:
        Formatted UTC airdate, the raw string if it could not be parsed,
        or "" if raw is None or empty.

    Examples:
        >>> format_airdate("2019-08-30T21:00:00Z")
        '20190830 21:00:00'
        >>> format_airdate("2019-08-30")
        '20190830 00:00:00'
        >>> format_airdate("not-a-date")
        'not-a-date'
    """
    if not raw:
        return ""

    parsed: datetime | None = None
    try:
        if is_iso_timestamp(raw):
            parsed = parse_iso_timestamp(raw)
        elif is_simple_date(raw):
            parsed = parse_simple_date(raw)
    except ValueError:
        parsed = None

    if parsed is None:
        return raw
    return parsed.astimezone(timezone.utc).strftime(NIELSEN_AIRDATE_FORMAT)


def current_epoch_seconds() -> int:
    """Current UTC time as whole seconds since the epoch."""
    return int(time.time())
