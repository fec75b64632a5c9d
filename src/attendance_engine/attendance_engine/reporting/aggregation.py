"""Pure folds over one snapshot of attendance views.

Nothing here queries a store or reads a clock: callers pass the records and
"today", so the same input always gives the same output.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date, time
from typing import Iterable, Sequence

from ..common.datetime_utils import minute_of_day
from ..core.constants import LATE_SEVERITY_HIGH_COUNT, LATE_SEVERITY_MEDIUM_COUNT
from ..core.enums import AttendanceStatus, LateSeverity
from ..attendance.model import AttendanceView


@dataclass(frozen=True)
class MonthlyStats:
    employee_id: str
    year: int
    month: int
    present: int = 0
    late: int = 0
    absent: int = 0
    early_leave: int = 0
    on_leave: int = 0
    mission: int = 0
    weekend: int = 0
    working_days: int = 0
    total_hours: int = 0
    total_minutes: int = 0
    overtime_hours: int = 0
    attendance_rate: float = 0.0
    punctuality_rate: float = 0.0

    def as_dict(self) -> dict:
        return asdict(self)


def rate(part: int, whole: int) -> float:
    """Percentage rounded to one decimal; 0.0 when there is nothing to divide by."""
    if whole <= 0:
        return 0.0
    return round(min(max(part / whole * 100, 0.0), 100.0), 1)


def monthly_stats(
    employee_id: str,
    year: int,
    month: int,
    views: Iterable[AttendanceView],
    *,
    today: date,
) -> MonthlyStats:
    counts = {status: 0 for status in AttendanceStatus}
    working_days = 0
    worked_minutes = 0
    overtime = 0

    for v in views:
        r = v.record
        counts[r.status] += 1
        if r.status != AttendanceStatus.WEEKEND and r.work_date <= today:
            working_days += 1
        worked_minutes += v.worked_minutes
        overtime += v.overtime

    present_only = counts[AttendanceStatus.PRESENT]
    late = counts[AttendanceStatus.LATE]
    present = present_only + late

    return MonthlyStats(
        employee_id=employee_id,
        year=int(year),
        month=int(month),
        present=present,
        late=late,
        absent=counts[AttendanceStatus.ABSENT],
        early_leave=counts[AttendanceStatus.EARLY_LEAVE],
        on_leave=counts[AttendanceStatus.ON_LEAVE],
        mission=counts[AttendanceStatus.MISSION],
        weekend=counts[AttendanceStatus.WEEKEND],
        working_days=working_days,
        total_hours=worked_minutes // 60,
        total_minutes=worked_minutes % 60,
        overtime_hours=overtime,
        attendance_rate=rate(present, working_days),
        punctuality_rate=rate(present_only, present_only + late),
    )


@dataclass(frozen=True)
class LateArrivalSummary:
    employee_id: str
    employee_name: str
    department: str
    count: int
    total_minutes_late: int
    average_minutes_late: int
    severity: LateSeverity

    def as_dict(self) -> dict:
        data = asdict(self)
        data["severity"] = self.severity.value
        return data


def late_severity(count: int) -> LateSeverity:
    if count >= LATE_SEVERITY_HIGH_COUNT:
        return LateSeverity.HIGH
    if count >= LATE_SEVERITY_MEDIUM_COUNT:
        return LateSeverity.MEDIUM
    return LateSeverity.LOW


def late_arrivals(views: Iterable[AttendanceView], *, late_threshold: time) -> list[LateArrivalSummary]:
    """Late days grouped per employee, most frequent offenders first."""
    groups: dict[str, dict] = {}
    for v in views:
        r = v.record
        if r.status != AttendanceStatus.LATE:
            continue
        g = groups.get(r.employee_id)
        if not g:
            g = {"employee_name": r.employee_name, "department": r.department, "count": 0, "minutes": 0}
            groups[r.employee_id] = g
        g["count"] += 1
        if r.check_in is not None:
            g["minutes"] += max(0, minute_of_day(r.check_in) - minute_of_day(late_threshold))

    out = [
        LateArrivalSummary(
            employee_id=employee_id,
            employee_name=g["employee_name"],
            department=g["department"],
            count=g["count"],
            total_minutes_late=g["minutes"],
            average_minutes_late=round(g["minutes"] / g["count"]),
            severity=late_severity(g["count"]),
        )
        for employee_id, g in groups.items()
    ]
    out.sort(key=lambda s: (-s.count, s.employee_id))
    return out


def department_breakdown(views: Sequence[AttendanceView]) -> list[dict]:
    depts: dict[str, dict] = {}
    for v in views:
        r = v.record
        d = depts.setdefault(r.department or "-", {"department": r.department or "-", "present": 0, "late": 0, "absent": 0})
        if r.status == AttendanceStatus.PRESENT:
            d["present"] += 1
        elif r.status == AttendanceStatus.LATE:
            d["late"] += 1
        elif r.status == AttendanceStatus.ABSENT:
            d["absent"] += 1
    return [depts[k] for k in sorted(depts)]
