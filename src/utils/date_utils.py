"""Date and time utility functions."""
from datetime import date, datetime, timezone
from typing import Optional


def now_local() -> datetime:
    """Return the current time as an aware datetime in the local timezone."""
    return datetime.now().astimezone()


def format_registration_date(moment: datetime) -> str:
    """
    Format a moment for display next to a registration.

    Args:
        moment: Time of registration

    Returns:
        Month abbreviation, day, year and 12-hour clock time,
        e.g. "Jan 1, 2024, 10:00 AM"
    """
    return f"{moment:%b} {moment.day}, {moment.year}, {moment:%I:%M %p}"


def to_iso_timestamp(moment: datetime) -> str:
    """
    Convert a moment to a sortable ISO 8601 UTC timestamp.

    Naive datetimes are treated as local time.

    Returns:
        Timestamp with millisecond precision and a 'Z' suffix,
        e.g. "2024-01-01T10:00:00.000Z"
    """
    utc_moment = moment.astimezone(timezone.utc)
    return utc_moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_iso_timestamp(timestamp: str) -> datetime:
    """
    Parse an ISO 8601 timestamp, accepting a trailing 'Z'.

    Raises:
        ValueError: If the timestamp cannot be parsed
    """
    if not isinstance(timestamp, str):
        raise ValueError(f"Invalid timestamp format: {timestamp!r}")
    return datetime.fromisoformat(timestamp.replace("Z", "+00:00"))


def iso_date(today: Optional[date] = None) -> str:
    """Return the date in YYYY-MM-DD format (today if omitted)."""
    if today is None:
        today = now_local().date()
    return today.isoformat()
