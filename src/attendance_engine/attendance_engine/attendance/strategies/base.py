from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import time
from typing import Optional

from ...core.enums import AttendanceStatus
from ..policy import AttendancePolicy


@dataclass(frozen=True)
class StatusDecision:
    status: AttendanceStatus
    note: Optional[str] = None


class AttendanceStrategy(ABC):
    """Strategy Pattern: encapsulate how we decide an attendance status."""

    @abstractmethod
    def decide_checkin(self, *, check_in: Optional[time], policy: AttendancePolicy) -> StatusDecision:
        raise NotImplementedError

    @abstractmethod
    def decide_checkout(
        self, *, check_out: time, policy: AttendancePolicy, current: AttendanceStatus
    ) -> StatusDecision:
        raise NotImplementedError
