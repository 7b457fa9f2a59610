"""Date parsing and day-boundary utilities."""

import re
from datetime import date, datetime, time


# Accepted textual date formats, tried in order after ISO 8601.
#
# Slash-separated dates (e.g., "03/04/2024") are always interpreted as US format (MM/DD/YYYY).
# For European dates use period-separated format (03.04.2024) or ISO format (2024-04-03).
DATE_PATTERNS = [
    (r"^(\d{1,2})/(\d{1,2})/(\d{4})$", "%m/%d/%Y"),
    (r"^(\d{1,2})\.(\d{1,2})\.(\d{4})$", "%d.%m.%Y"),
    (r"^(\w{3})\s+(\d{1,2}),?\s+(\d{4})$", "%b %d, %Y"),
    (r"^(\d{8})$", "%Y%m%d"),
]

COMPILED_PATTERNS = [(re.compile(pattern), fmt) for pattern, fmt in DATE_PATTERNS]


def to_local_naive(moment: datetime) -> datetime:
    """Convert an offset-aware datetime to naive local time; naive values pass through."""
    if moment.tzinfo is None:
        return moment
    return moment.astimezone().replace(tzinfo=None)


def parse_datetime(raw: str | date | datetime) -> datetime:
    """Parse a raw value into a datetime.

    Handles:
    - datetime / date objects (dates become midnight)
    - ISO: 2024-01-15, 2024-01-15T10:30:00, 2024-01-15T10:30:00Z
    - US: 01/15/2024
    - European: 15.01.2024
    - Text: Jan 15, 2024
    - Compact: 20240115

    Values carrying a UTC offset are converted to naive local time so they
    compare with naive report boundaries.

    Args:
        raw: The raw value to parse.

    Returns:
        Parsed datetime.

    Raises:
        ValueError: If the value cannot be parsed.
    """
    if isinstance(raw, datetime):
        return to_local_naive(raw)
    if isinstance(raw, date):
        return datetime.combine(raw, time.min)
    if not raw:
        raise ValueError("Empty date string")

    date_str = str(raw).strip()
    if not date_str:
        raise ValueError("Empty date string after stripping whitespace")

    try:
        # fromisoformat only learned the "Z" suffix in 3.11
        return to_local_naive(datetime.fromisoformat(date_str.replace("Z", "+00:00")))
    except ValueError:
        pass

    for pattern, fmt in COMPILED_PATTERNS:
        if pattern.match(date_str):
            try:
                return datetime.strptime(date_str, fmt)
            except ValueError:
                continue

    raise ValueError(f"Cannot parse date: '{raw}'")


def start_of_day(moment: datetime) -> datetime:
    """Return midnight of the moment's day, keeping its tzinfo."""
    return datetime.combine(moment.date(), time.min, tzinfo=moment.tzinfo)


def end_of_day(moment: datetime) -> datetime:
    """Return the last representable instant of the moment's day."""
    return datetime.combine(moment.date(), time.max, tzinfo=moment.tzinfo)


def get_quarter(d: date) -> int:
    """Get the quarter (1-4) for a date."""
    return (d.month - 1) // 3 + 1
