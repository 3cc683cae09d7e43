"""Calendar helpers for challenge dates (UTC calendar days)."""

import calendar
import re
from datetime import date, datetime, time, timedelta, timezone

from pushups.services.errors import ValidationError

_ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def utcnow() -> datetime:
    """Current time as naive UTC, matching how timestamps are stored."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def add_one_month(day: date) -> date:
    """Same day next month, clamped to the last day when that month is shorter (Jan 31 -> Feb 28)."""
    year, month = (day.year + 1, 1) if day.month == 12 else (day.year, day.month + 1)
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def parse_iso_date(value: str, field: str = "date") -> date:
    """Parse a strict YYYY-MM-DD string; raise ValidationError otherwise."""
    if not isinstance(value, str) or not _ISO_DATE_RE.match(value.strip()):
        raise ValidationError(f"{field} must be a date in YYYY-MM-DD format")
    try:
        return date.fromisoformat(value.strip())
    except ValueError as e:
        raise ValidationError(f"{field} is not a valid calendar date: {value}") from e


def window_bounds(start: date, end: date) -> tuple[datetime, datetime]:
    """Half-open datetime range covering start 00:00 through the whole end day."""
    return (
        datetime.combine(start, time.min),
        datetime.combine(end + timedelta(days=1), time.min),
    )
