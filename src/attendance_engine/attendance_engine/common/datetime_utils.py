from __future__ import annotations

import calendar
import re
from datetime import date, datetime, time
from typing import Optional, Union

from ..core.exceptions import InvalidTimeFormat, ValidationError

ClockValue = Union[time, str, None]

_CLOCK_RE = re.compile(r"^(\d{1,2}):(\d{2})$")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid date (YYYY-MM-DD): {value!r}")


def parse_clock(value: ClockValue) -> Optional[time]:
    """Turn a wall-clock value into a minute-precision time.

    Accepts ``datetime.time`` (seconds are dropped) or a 24-hour ``HH:MM``
    string. ``None`` and blank strings mean "not recorded".
    """
    if value is None:
        return None
    if isinstance(value, time):
        return value.replace(second=0, microsecond=0, tzinfo=None)
    if not isinstance(value, str):
        raise InvalidTimeFormat(f"Unsupported clock value: {value!r}")

    v = value.strip()
    if not v:
        return None
    m = _CLOCK_RE.match(v)
    if not m:
        raise InvalidTimeFormat(f"Invalid time (HH:MM): {value!r}")
    hour, minute = int(m.group(1)), int(m.group(2))
    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        raise InvalidTimeFormat(f"Invalid time (HH:MM): {value!r}")
    return time(hour, minute)


def format_clock(value: Optional[time]) -> Optional[str]:
    return value.strftime("%H:%M") if value else None


def minute_of_day(value: time) -> int:
    return value.hour * 60 + value.minute


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """First and last day of a calendar month."""
    if not 1 <= int(month) <= 12:
        raise ValidationError(f"Invalid month: {month!r}")
    try:
        last = calendar.monthrange(int(year), int(month))[1]
        return date(int(year), int(month), 1), date(int(year), int(month), last)
    except ValueError:
        raise ValidationError(f"Invalid year: {year!r}")
