from __future__ import annotations

from datetime import time
from typing import Optional

from ...core.enums import AttendanceStatus
from ..policy import AttendancePolicy
from .base import AttendanceStrategy, StatusDecision


class AbsentStrategy(AttendanceStrategy):
    """Past working day without any check-in."""

    def decide_checkin(self, *, check_in: Optional[time], policy: AttendancePolicy) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.ABSENT)

    def decide_checkout(
        self, *, check_out: time, policy: AttendancePolicy, current: AttendanceStatus
    ) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.ABSENT)
