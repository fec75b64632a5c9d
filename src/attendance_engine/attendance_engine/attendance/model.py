from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import FrozenSet, Optional

from ..common.datetime_utils import format_clock
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from ..timecalc.elapsed import Elapsed, elapsed, overtime_hours


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attendance day of one employee.

    Only raw facts are stored. Worked time and overtime are derived on read
    (see ``AttendanceView``).
    """

    record_id: str
    employee_id: str
    work_date: date
    status: AttendanceStatus
    check_in: Optional[time] = None
    check_out: Optional[time] = None
    employee_name: str = ""
    department: str = ""
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        if self.check_out is not None and self.check_in is None:
            raise ValidationError("check_out requires check_in")

    @property
    def is_open(self) -> bool:
        return self.check_in is not None and self.check_out is None

    @property
    def is_closed(self) -> bool:
        return self.check_out is not None

    @property
    def worked(self) -> Elapsed:
        return elapsed(self.check_in, self.check_out)


class _Unchanged:
    def __repr__(self) -> str:
        return "UNCHANGED"


UNCHANGED = _Unchanged()


@dataclass(frozen=True)
class RecordMutation:
    """Partial update for ``AttendanceRepository.update``.

    Fields left as ``UNCHANGED`` keep their stored value; ``None`` clears.
    """

    check_in: object = UNCHANGED
    check_out: object = UNCHANGED
    status: object = UNCHANGED
    notes: object = UNCHANGED
    updated_at: object = UNCHANGED

    def changes(self) -> dict:
        return {k: v for k, v in self.__dict__.items() if v is not UNCHANGED}


@dataclass(frozen=True)
class RecordFilter:
    employee_id: Optional[str] = None
    department: Optional[str] = None
    work_date: Optional[date] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    statuses: FrozenSet[AttendanceStatus] = field(default_factory=frozenset)

    def __post_init__(self):
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValidationError("end_date must be >= start_date")

    def matches(self, r: AttendanceRecord) -> bool:
        if self.employee_id is not None and r.employee_id != self.employee_id:
            return False
        if self.department is not None and r.department != self.department:
            return False
        if self.work_date is not None and r.work_date != self.work_date:
            return False
        if self.start_date is not None and r.work_date < self.start_date:
            return False
        if self.end_date is not None and r.work_date > self.end_date:
            return False
        if self.statuses and r.status not in self.statuses:
            return False
        return True


@dataclass(frozen=True)
class AttendanceView:
    """Read-model handed to collaborators: raw record plus derived time fields."""

    record: AttendanceRecord
    work_hours: int
    work_minutes: int
    overtime: int

    @classmethod
    def of(cls, record: AttendanceRecord, *, standard_day_hours: int) -> "AttendanceView":
        worked = record.worked
        return cls(
            record=record,
            work_hours=worked.hours,
            work_minutes=worked.minutes,
            overtime=overtime_hours(worked.hours, standard_day_hours),
        )

    @property
    def worked_minutes(self) -> int:
        return self.work_hours * 60 + self.work_minutes

    def as_dict(self) -> dict:
        r = self.record
        return {
            "id": r.record_id,
            "employee_id": r.employee_id,
            "employee_name": r.employee_name,
            "department": r.department,
            "date": r.work_date.isoformat(),
            "check_in": format_clock(r.check_in),
            "check_out": format_clock(r.check_out),
            "status": r.status.value,
            "work_hours": self.work_hours,
            "work_minutes": self.work_minutes,
            "overtime": self.overtime,
            "notes": r.notes,
        }
