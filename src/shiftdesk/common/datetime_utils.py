"""Date/time normalization.

Storage speaks two wire formats: date-only ``YYYY-MM-DD`` and canonical
datetime ``YYYY-MM-DD HH:MM:SS`` (UTC, space separated). Values read back
may also arrive as ISO-8601 with ``Z``. This module is the only place that
converts between those forms.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Union

import pytz

CANONICAL_DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"
DATE_FORMAT = "%Y-%m-%d"

DateTimeLike = Union[str, date, datetime, None]


def to_date_only(value: DateTimeLike) -> str:
    """Return the ``YYYY-MM-DD`` part of a date/time-ish value ('' for None)."""
    if value is None:
        return ""
    if isinstance(value, datetime):
        return value.strftime(DATE_FORMAT)
    if isinstance(value, date):
        return value.strftime(DATE_FORMAT)

    text = str(value).strip()
    if "T" in text:
        return text.split("T", 1)[0]
    if " " in text:
        return text.split(" ", 1)[0]
    return text


def parse_lenient(value: DateTimeLike) -> Optional[datetime]:
    """Parse a canonical, space-separated or ISO value as an aware UTC datetime.

    Values without a zone marker are read as UTC. Returns None when the value
    cannot be parsed.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return _as_utc(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=pytz.UTC)

    text = str(value).strip()
    if not text:
        return None
    if " " in text and "T" not in text:
        text = text.replace(" ", "T", 1)
    if text[-1] in "Zz":
        text = text[:-1] + "+00:00"

    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    return _as_utc(parsed)


def to_canonical_datetime(value: DateTimeLike) -> Optional[str]:
    """Format any accepted value as ``YYYY-MM-DD HH:MM:SS`` in UTC, or None."""
    parsed = parse_lenient(value)
    if parsed is None:
        return None
    return parsed.strftime(CANONICAL_DATETIME_FORMAT)


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(to_date_only(value), DATE_FORMAT).date()


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return pytz.UTC.localize(value)
    return value.astimezone(pytz.UTC)


def now_utc() -> datetime:
    """Current time in UTC.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(pytz.UTC)


def get_timezone(name: str = "UTC") -> pytz.BaseTzInfo:
    try:
        return pytz.timezone(name or "UTC")
    except pytz.UnknownTimeZoneError:
        return pytz.UTC


def to_wall_clock(value: datetime, tz: pytz.BaseTzInfo) -> datetime:
    """Convert an instant to the wall clock of ``tz`` (naive input is UTC)."""
    return _as_utc(value).astimezone(tz)


def minutes_since_midnight(value: datetime) -> float:
    """Minutes into the day, including seconds as a fraction."""
    return value.hour * 60 + value.minute + value.second / 60 + value.microsecond / 60_000_000


def hours_between(start: datetime, end: datetime) -> float:
    return (end - start).total_seconds() / 3600


def format_wall_time(value: DateTimeLike, tz: pytz.BaseTzInfo) -> str:
    """HH:MM on the wall clock of ``tz``, or '-' when missing/unreadable."""
    parsed = parse_lenient(value)
    if parsed is None:
        return "-"
    return parsed.astimezone(tz).strftime("%H:%M")
