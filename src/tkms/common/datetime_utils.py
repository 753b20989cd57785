from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta
from decimal import ROUND_HALF_UP, Decimal
from zoneinfo import ZoneInfo

from ..core.constants import CANONICAL_TIMEZONE, TIME_OF_DAY_PATTERN, WEEKDAYS
from ..core.exceptions import InvalidSchedule, ValidationError

LOCAL_TZ = ZoneInfo(CANONICAL_TIMEZONE)

_TIME_OF_DAY_RE = re.compile(TIME_OF_DAY_PATTERN)


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid date (YYYY-MM-DD): {value!r}")


def now_local() -> datetime:
    """Current time in the canonical timezone.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(LOCAL_TZ)


def to_local(value: datetime) -> datetime:
    """Normalize an instant to the canonical timezone.

    Naive datetimes are taken to already be canonical wall-clock time.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=LOCAL_TZ)
    return value.astimezone(LOCAL_TZ)


def parse_time_of_day(value: str, field_name: str = "time") -> time:
    """Parse an ``"HH:MM"`` 24-hour string, raising InvalidSchedule when malformed."""
    if not isinstance(value, str) or not _TIME_OF_DAY_RE.match(value):
        raise InvalidSchedule(f"{field_name} must be in HH:mm format, got {value!r}")
    hours, minutes = value.split(":")
    return time(int(hours), int(minutes))


def at_time_of_day(day: date, value: time) -> datetime:
    """Overlay a time of day onto a calendar date in the canonical timezone."""
    return datetime.combine(day, value, tzinfo=LOCAL_TZ)


def whole_minutes(delta: timedelta) -> int:
    """Round a duration to the nearest whole minute (half away from zero)."""
    seconds = Decimal(str(delta.total_seconds()))
    return int((seconds / 60).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def minutes_to_hours(minutes: int) -> float:
    """Minutes as hours rounded to 2 decimals (half away from zero)."""
    hours = Decimal(int(minutes)) / 60
    return float(hours.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def weekday_name(day: date) -> str:
    return WEEKDAYS[day.weekday()]


def day_bounds(day: date) -> tuple[datetime, datetime]:
    """Start (inclusive) and end (exclusive) of a canonical calendar day."""
    start = datetime.combine(day, time(0, 0), tzinfo=LOCAL_TZ)
    return start, start + timedelta(days=1)
