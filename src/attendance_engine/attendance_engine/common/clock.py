from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Protocol
from zoneinfo import ZoneInfo


class Clock(Protocol):
    """Source of "now" for the engine.

    Note: Wrapped so tests can supply fixed times instead of the system clock.
    """

    def now(self) -> datetime:
        raise NotImplementedError


class SystemClock:
    """Local wall clock of the work calendar (naive datetimes)."""

    def __init__(self, timezone: Optional[str] = None):
        self._tz = ZoneInfo(timezone) if timezone else None

    def now(self) -> datetime:
        if self._tz is None:
            return datetime.now()
        return datetime.now(self._tz).replace(tzinfo=None)


@dataclass
class FixedClock:
    current: datetime

    def now(self) -> datetime:
        return self.current

    def set(self, value: datetime) -> None:
        self.current = value
