from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Exactly one status per attendance day."""

    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"
    EARLY_LEAVE = "early-leave"
    ON_LEAVE = "on-leave"
    WEEKEND = "weekend"
    MISSION = "mission"

    @property
    def is_override(self) -> bool:
        return self in OVERRIDE_STATUSES


OVERRIDE_STATUSES = frozenset({AttendanceStatus.WEEKEND, AttendanceStatus.ON_LEAVE, AttendanceStatus.MISSION})


class LateEarlyPrecedence(str, Enum):
    """What a late arrival becomes when the same day also ends early."""

    LATE_WINS = "late_wins"
    EARLY_LEAVE_WINS = "early_leave_wins"


class SortOrder(str, Enum):
    NEWEST_FIRST = "desc"
    OLDEST_FIRST = "asc"


class LateSeverity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
