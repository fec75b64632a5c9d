"""Status Classifier.

Rules, first match wins:

1. an override (weekend, on-leave, mission) is kept whatever the times say;
2. no check-in on a past date is ``absent``;
3. a check-in at or after the late threshold is ``late``;
4. a check-out before the standard end demotes ``present`` to ``early-leave``
   (``late`` is only demoted under ``LateEarlyPrecedence.EARLY_LEAVE_WINS``);
5. everything else is ``present``.
"""

from __future__ import annotations

from datetime import time
from typing import Optional

from ..common.datetime_utils import ClockValue, parse_clock
from ..core.enums import AttendanceStatus
from .factory import AttendanceStrategyFactory
from .policy import AttendancePolicy
from .strategies.base import StatusDecision


class StatusClassifier:
    def __init__(self, policy: AttendancePolicy | None = None, *, factory: AttendanceStrategyFactory | None = None):
        self.policy = policy or AttendancePolicy()
        self._factory = factory or AttendanceStrategyFactory()

    def classify(
        self,
        *,
        check_in: ClockValue,
        check_out: ClockValue = None,
        override: Optional[AttendanceStatus] = None,
        is_past: bool = False,
    ) -> AttendanceStatus:
        """Whole-day classification. Pure: same inputs, same status."""
        start = parse_clock(check_in)
        end = parse_clock(check_out)

        strategy = self._factory.for_day(check_in=start, override=override, is_past=is_past, policy=self.policy)
        status = strategy.decide_checkin(check_in=start, policy=self.policy).status
        if override is not None or start is None or end is None:
            return status
        return self.on_check_out(status, end).status

    def on_check_in(self, check_in: time) -> StatusDecision:
        strategy = self._factory.for_checkin(check_in=check_in, policy=self.policy)
        return strategy.decide_checkin(check_in=check_in, policy=self.policy)

    def on_check_out(self, current: AttendanceStatus, check_out: time) -> StatusDecision:
        strategy = self._factory.for_checkout(check_out=check_out, policy=self.policy, current_status=current)
        return strategy.decide_checkout(check_out=check_out, policy=self.policy, current=current)
