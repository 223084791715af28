"""
Date-key parsing and formatting utilities.

Every completion record is joined to a task through a date key, the
canonical ``YYYY-MM-DD`` string of a local calendar date.
"""

import calendar
from datetime import date, datetime, timedelta, tzinfo
from typing import List, Optional, Union


DATE_KEY_FORMAT = '%Y-%m-%d'


def format_date_key(d: Union[date, datetime]) -> str:
    """
    Format a date (or datetime) as a date key (YYYY-MM-DD).

    Args:
        d: Date or datetime to format. Datetimes are formatted using their
           own wall-clock date; convert to the target zone first.

    Returns:
        Date key string
    """
    if isinstance(d, datetime):
        d = d.date()
    return d.strftime(DATE_KEY_FORMAT)


def parse_date_key(key: str) -> date:
    """
    Parse a date key into a date object.

    Raises:
        ValueError: If the key is not a valid YYYY-MM-DD date
    """
    if not isinstance(key, str) or len(key) != 10:
        raise ValueError(f"Invalid date key: {key!r}")
    return datetime.strptime(key, DATE_KEY_FORMAT).date()


def parse_date_key_safe(key: Optional[str]) -> Optional[date]:
    """Parse a date key, returning None for missing or malformed input."""
    if not key:
        return None
    try:
        return parse_date_key(key)
    except ValueError:
        return None


def is_date_key(value: str) -> bool:
    """Return True if value is a well-formed date key."""
    return parse_date_key_safe(value) is not None


def today(tz: Optional[tzinfo] = None) -> date:
    """Current calendar date in ``tz`` (process local zone when None)."""
    return datetime.now(tz).date()


def today_key(tz: Optional[tzinfo] = None) -> str:
    """Current calendar date as a date key."""
    return format_date_key(today(tz))


def local_date(instant: datetime, tz: Optional[tzinfo] = None) -> date:
    """
    Calendar date of an instant as seen from ``tz``.

    Naive datetimes are treated as already local and returned as-is.
    """
    if instant.tzinfo is None:
        return instant.date()
    return instant.astimezone(tz).date()


def shift_key(key: str, days: int) -> str:
    """Return the date key ``days`` days after ``key`` (negative goes back)."""
    return format_date_key(parse_date_key(key) + timedelta(days=days))


def days_between(start: date, end: date) -> int:
    """Number of calendar days from start to end (negative if end is earlier)."""
    return (end - start).days


def date_range(start: date, end: date) -> List[date]:
    """All dates from start through end inclusive; empty if end < start."""
    span = days_between(start, end)
    return [start + timedelta(days=offset) for offset in range(span + 1)]


def month_days(d: date) -> List[date]:
    """
    All days of the month containing ``d``.

    Args:
        d: Any date within the target month

    Returns:
        List of dates from the 1st through the last day of the month
    """
    _, last_day = calendar.monthrange(d.year, d.month)
    return date_range(d.replace(day=1), d.replace(day=last_day))
