from __future__ import annotations

from dataclasses import dataclass
from datetime import time

from ..common.datetime_utils import parse_clock
from ..core.constants import DEFAULT_LATE_THRESHOLD, DEFAULT_STANDARD_DAY_HOURS, DEFAULT_STANDARD_END
from ..core.enums import LateEarlyPrecedence
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class AttendancePolicy:
    """Thresholds used to classify a day and to split off overtime."""

    late_threshold: time = DEFAULT_LATE_THRESHOLD
    standard_end: time = DEFAULT_STANDARD_END
    standard_day_hours: int = DEFAULT_STANDARD_DAY_HOURS
    precedence: LateEarlyPrecedence = LateEarlyPrecedence.LATE_WINS

    def __post_init__(self):
        if int(self.standard_day_hours) < 0:
            raise ValidationError("standard_day_hours must be >= 0")

    @classmethod
    def from_settings(cls, settings) -> "AttendancePolicy":
        late = parse_clock(getattr(settings, "LATE_THRESHOLD", None)) or DEFAULT_LATE_THRESHOLD
        end = parse_clock(getattr(settings, "STANDARD_END", None)) or DEFAULT_STANDARD_END
        hours = int(getattr(settings, "STANDARD_DAY_HOURS", DEFAULT_STANDARD_DAY_HOURS))
        raw_precedence = getattr(settings, "LATE_EARLY_PRECEDENCE", LateEarlyPrecedence.LATE_WINS.value)
        try:
            precedence = LateEarlyPrecedence(raw_precedence)
        except ValueError:
            raise ValidationError(f"Unknown LATE_EARLY_PRECEDENCE: {raw_precedence!r}")
        return cls(late_threshold=late, standard_end=end, standard_day_hours=hours, precedence=precedence)
