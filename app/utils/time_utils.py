"""
Time-of-day and calendar-date helpers.

Times of day are plain integers (minutes since midnight, 0..1439) and are
persisted as zero-padded 24-hour "HH:MM" strings. Calendar dates are ISO
"YYYY-MM-DD" strings used as opaque keys. There is a single salon-local
clock: no timezone or DST handling happens here.
"""
import re
from datetime import date
from enum import Enum

from app.core.exceptions import InvalidInputError

MINUTES_PER_DAY = 24 * 60

_TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")
_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class TimeOrder(str, Enum):
    BEFORE = "before"
    EQUAL = "equal"
    AFTER = "after"


def parse_time(value: str) -> int:
    """Parse an "HH:MM" string into minutes since midnight."""
    match = _TIME_PATTERN.match(value) if isinstance(value, str) else None
    if not match:
        raise InvalidInputError(f"Time must be in HH:MM format, got {value!r}")
    return int(match.group(1)) * 60 + int(match.group(2))


def format_time(minutes: int) -> str:
    """Format minutes since midnight as "HH:MM"."""
    if not 0 <= minutes < MINUTES_PER_DAY:
        raise InvalidInputError(f"Time of day out of range: {minutes}")
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def add_minutes(time_of_day: int, minutes: int) -> int:
    """
    Add minutes to a time of day, wrapping modulo 24h.

    The result never rolls into the next date; callers that must stay within
    one day compare against their window end instead of relying on this.
    """
    return (time_of_day + minutes) % MINUTES_PER_DAY


def compare(a: int, b: int) -> TimeOrder:
    if a < b:
        return TimeOrder.BEFORE
    if a > b:
        return TimeOrder.AFTER
    return TimeOrder.EQUAL


def parse_date(value: str) -> date:
    """Validate an ISO "YYYY-MM-DD" string and return it as a date."""
    if not isinstance(value, str) or not _DATE_PATTERN.match(value):
        raise InvalidInputError(f"Date must be in YYYY-MM-DD format, got {value!r}")
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise InvalidInputError(f"Invalid calendar date: {value!r}") from e


def day_of_week(value: str) -> int:
    """Weekday of an ISO date, 0 = Sunday ... 6 = Saturday."""
    return parse_date(value).isoweekday() % 7
