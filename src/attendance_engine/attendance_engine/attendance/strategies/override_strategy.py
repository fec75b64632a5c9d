from __future__ import annotations

from datetime import time
from typing import Optional

from ...core.enums import AttendanceStatus
from ...core.exceptions import ValidationError
from ..policy import AttendancePolicy
from .base import AttendanceStrategy, StatusDecision


class OverrideStrategy(AttendanceStrategy):
    """Weekend, leave or mission: the external authority decides, times do not."""

    def __init__(self, status: AttendanceStatus):
        if not status.is_override:
            raise ValidationError(f"{status.value} is not an override status")
        self.status = status

    def decide_checkin(self, *, check_in: Optional[time], policy: AttendancePolicy) -> StatusDecision:
        return StatusDecision(status=self.status)

    def decide_checkout(
        self, *, check_out: time, policy: AttendancePolicy, current: AttendanceStatus
    ) -> StatusDecision:
        return StatusDecision(status=self.status)
