from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import Optional

from ..attendance.model import RecordFilter
from ..common.clock import Clock, SystemClock
from ..common.datetime_utils import format_clock
from ..core.constants import DEFAULT_LATE_THRESHOLD
from ..core.enums import AttendanceStatus, SortOrder
from ..query.service import AttendanceQueryService
from .aggregation import LateArrivalSummary, MonthlyStats, department_breakdown, late_arrivals, monthly_stats


@dataclass(frozen=True)
class ReportData:
    rows: list[dict]
    summary: list[dict]


class AttendanceReportService:
    """Aggregation entry points for dashboards, reports and payroll feeds.

    Each method reads one snapshot through the query facade and folds over it.
    """

    def __init__(
        self,
        queries: AttendanceQueryService,
        *,
        late_threshold: time = DEFAULT_LATE_THRESHOLD,
        clock: Clock | None = None,
    ):
        self._queries = queries
        self._late_threshold = late_threshold
        self._clock = clock or SystemClock()

    def monthly_records(self, employee_id: str, year: int, month: int):
        return self._queries.monthly_records(employee_id, year, month)

    def monthly_stats(self, employee_id: str, year: int, month: int) -> MonthlyStats:
        snapshot = self._queries.monthly_records(employee_id, year, month)
        return monthly_stats(employee_id, year, month, snapshot, today=self._clock.now().date())

    def late_arrivals(self, *, start: date, end: date, department: Optional[str] = None) -> list[LateArrivalSummary]:
        snapshot = self._queries.query(
            RecordFilter(
                department=department,
                start_date=start,
                end_date=end,
                statuses=frozenset({AttendanceStatus.LATE}),
            )
        )
        return late_arrivals(snapshot, late_threshold=self._late_threshold)

    def department_breakdown(self, *, start: date, end: date) -> list[dict]:
        return department_breakdown(self._queries.query(RecordFilter(start_date=start, end_date=end)))

    def build_attendance_report(
        self,
        *,
        start: date,
        end: date,
        employee_id: Optional[str] = None,
        department: Optional[str] = None,
    ) -> ReportData:
        views = self._queries.query(
            RecordFilter(employee_id=employee_id, department=department, start_date=start, end_date=end),
            SortOrder.NEWEST_FIRST,
        )

        summary_map: dict[str, dict] = {}
        out_rows: list[dict] = []

        for v in views:
            r = v.record
            minutes = v.worked_minutes
            worked_hours = f"{minutes // 60:02d}:{minutes % 60:02d}"

            out_rows.append(
                {
                    "employee_id": r.employee_id,
                    "employee_name": r.employee_name,
                    "department": r.department or "-",
                    "work_date": r.work_date.strftime("%Y-%m-%d"),
                    "check_in": format_clock(r.check_in) or "-",
                    "check_out": format_clock(r.check_out) or "-",
                    "worked_hours": worked_hours,
                    "overtime": v.overtime,
                    "status": r.status.value,
                    "notes": r.notes or "",
                }
            )

            s = summary_map.get(r.employee_id)
            if not s:
                s = {
                    "employee_id": r.employee_id,
                    "employee_name": r.employee_name,
                    "total_minutes": 0,
                    "overtime": 0,
                }
                summary_map[r.employee_id] = s
            s["total_minutes"] += minutes
            s["overtime"] += v.overtime

        summary = []
        for s in summary_map.values():
            total_minutes = int(s["total_minutes"])
            summary.append(
                {
                    "employee_id": s["employee_id"],
                    "employee_name": s["employee_name"],
                    "total_minutes": total_minutes,
                    "total_hours": f"{total_minutes // 60:02d}:{total_minutes % 60:02d}",
                    "overtime": s["overtime"],
                }
            )

        summary.sort(key=lambda x: (-x["total_minutes"], x["employee_id"]))
        return ReportData(rows=out_rows, summary=summary)
