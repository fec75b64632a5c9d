from __future__ import annotations

from datetime import time
from typing import Optional

from ...common.datetime_utils import minute_of_day
from ...core.enums import AttendanceStatus
from ..policy import AttendancePolicy
from .base import AttendanceStrategy, StatusDecision


class LateStrategy(AttendanceStrategy):
    """Late check-in."""

    def decide_checkin(self, *, check_in: Optional[time], policy: AttendancePolicy) -> StatusDecision:
        late_by = minute_of_day(check_in) - minute_of_day(policy.late_threshold) if check_in else 0
        return StatusDecision(status=AttendanceStatus.LATE, note=f"late by {late_by} min")

    def decide_checkout(
        self, *, check_out: time, policy: AttendancePolicy, current: AttendanceStatus
    ) -> StatusDecision:
        return StatusDecision(status=current)
