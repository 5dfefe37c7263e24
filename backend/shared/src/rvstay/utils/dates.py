"""Calendar date helpers.

All keys are local calendar dates formatted as ``YYYY-MM-DD``. Ranges are
half-open: the start date is included, the end date is not.
"""

import datetime as dt
import math
import re

_MONTH_RE = re.compile(r"^(\d{4})-(\d{2})$")


def today() -> dt.date:
    """Return today's date on the local calendar (not UTC)."""
    return dt.date.today()


def to_key(day: dt.date) -> str:
    """Format a date as its canonical ``YYYY-MM-DD`` key."""
    return f"{day.year:04d}-{day.month:02d}-{day.day:02d}"


def parse_key(key: str) -> dt.date:
    """Parse a ``YYYY-MM-DD`` key back into a date."""
    year, month, day = (int(part) for part in key.split("-"))
    return dt.date(year, month, day)


def clamp_midnight(value: dt.date | dt.datetime) -> dt.date:
    """Drop the time-of-day component, keeping the calendar date."""
    if isinstance(value, dt.datetime):
        return value.date()
    return value


def same_day(a: dt.date | dt.datetime, b: dt.date | dt.datetime) -> bool:
    """Check calendar-day equality ignoring time of day."""
    return clamp_midnight(a) == clamp_midnight(b)


def parse_timestamp(value: str | None) -> dt.datetime | None:
    """Parse a stored ISO timestamp as an aware UTC datetime.

    Timestamps written without an offset are read as UTC.
    """
    if not value:
        return None
    parsed = dt.datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=dt.UTC)
    return parsed.astimezone(dt.UTC)


def start_of_month(day: dt.date) -> dt.date:
    return dt.date(day.year, day.month, 1)


def end_of_month(day: dt.date) -> dt.date:
    return add_months(day, 1) - dt.timedelta(days=1)


def add_months(anchor: dt.date, offset: int) -> dt.date:
    """Move a month anchor by ``offset`` months.

    Returns the first day of the resulting month; handles year rollover in
    both directions.
    """
    index = anchor.year * 12 + (anchor.month - 1) + offset
    return dt.date(index // 12, index % 12 + 1, 1)


def parse_month(value: str) -> dt.date:
    """Parse a ``YYYY-MM`` month string into its first day.

    Raises:
        ValueError: If the string is malformed or the month is out of range.
    """
    match = _MONTH_RE.match(value)
    if not match:
        raise ValueError(f"Invalid month format: {value!r}. Expected YYYY-MM")
    year, month = int(match.group(1)), int(match.group(2))
    if month < 1 or month > 12:
        raise ValueError("Month must be between 01 and 12")
    return dt.date(year, month, 1)


def nights_between(check_in: dt.date, check_out: dt.date) -> int:
    """Number of nights in ``[check_in, check_out)``, rounded up, never negative."""
    delta = clamp_midnight(check_out) - clamp_midnight(check_in)
    nights = math.ceil(delta.total_seconds() / 86400)
    return nights if nights > 0 else 0


def date_range(start: dt.date, end: dt.date) -> list[dt.date]:
    """Generate list of dates in range (end exclusive)."""
    return [start + dt.timedelta(days=i) for i in range((end - start).days)]
