"""Elapsed work time between two wall-clock values.

Pure functions only. A check-out earlier in the day than its check-in is read
as the next day (overnight shift), so the result is never negative.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..common.datetime_utils import ClockValue, minute_of_day, parse_clock
from ..core.constants import MINUTES_PER_DAY


@dataclass(frozen=True)
class Elapsed:
    hours: int = 0
    minutes: int = 0
    total_minutes: int = 0

    @classmethod
    def from_minutes(cls, total_minutes: int) -> "Elapsed":
        total = max(int(total_minutes), 0)
        return cls(hours=total // 60, minutes=total % 60, total_minutes=total)


ZERO = Elapsed()


def elapsed(check_in: ClockValue, check_out: ClockValue) -> Elapsed:
    start = parse_clock(check_in)
    end = parse_clock(check_out)
    if start is None or end is None:
        return ZERO

    start_m = minute_of_day(start)
    end_m = minute_of_day(end)
    if end_m < start_m:
        end_m += MINUTES_PER_DAY
    return Elapsed.from_minutes(end_m - start_m)


def overtime_hours(work_hours: int, standard_day_hours: int) -> int:
    """Whole hours beyond the standard day, zero at or below it."""
    return max(0, int(work_hours) - int(standard_day_hours))
