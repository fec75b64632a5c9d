from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from typing import Optional

from ..common.datetime_utils import minute_of_day
from ..core.enums import AttendanceStatus, LateEarlyPrecedence
from .policy import AttendancePolicy
from .strategies.absent_strategy import AbsentStrategy
from .strategies.base import AttendanceStrategy
from .strategies.early_strategy import EarlyLeaveStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.normal_strategy import NormalStrategy
from .strategies.override_strategy import OverrideStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules."""

    def for_day(
        self,
        *,
        check_in: Optional[time],
        override: Optional[AttendanceStatus],
        is_past: bool,
        policy: AttendancePolicy,
    ) -> AttendanceStrategy:
        if override is not None:
            return OverrideStrategy(override)
        if check_in is None and is_past:
            return AbsentStrategy()
        if check_in is None:
            return NormalStrategy()
        return self.for_checkin(check_in=check_in, policy=policy)

    def for_checkin(self, *, check_in: time, policy: AttendancePolicy) -> AttendanceStrategy:
        if minute_of_day(check_in) >= minute_of_day(policy.late_threshold):
            return LateStrategy()
        return NormalStrategy()

    def for_checkout(
        self, *, check_out: time, policy: AttendancePolicy, current_status: AttendanceStatus
    ) -> AttendanceStrategy:
        if minute_of_day(check_out) >= minute_of_day(policy.standard_end):
            return NormalStrategy()
        if current_status == AttendanceStatus.PRESENT:
            return EarlyLeaveStrategy()
        if current_status == AttendanceStatus.LATE and policy.precedence == LateEarlyPrecedence.EARLY_LEAVE_WINS:
            return EarlyLeaveStrategy()
        return NormalStrategy()
