from __future__ import annotations

from datetime import date, datetime, time

from src.attendance_engine.attendance_engine.attendance.memory_repository import InMemoryAttendanceRepository
from src.attendance_engine.attendance_engine.attendance.model import AttendanceRecord
from src.attendance_engine.attendance_engine.common.clock import FixedClock
from src.attendance_engine.attendance_engine.core.enums import AttendanceStatus
from src.attendance_engine.attendance_engine.query.service import AttendanceQueryService
from src.attendance_engine.attendance_engine.reporting.service import AttendanceReportService


class CountingRepo(InMemoryAttendanceRepository):
    def __init__(self, records=()):
        super().__init__(records)
        self.queries = []

    def query(self, record_filter):
        self.queries.append(record_filter)
        return super().query(record_filter)


def _rec(employee_id, day, check_in, check_out, status, name="", department="IT"):
    return AttendanceRecord(
        record_id="",
        employee_id=employee_id,
        employee_name=name,
        department=department,
        work_date=day,
        check_in=check_in,
        check_out=check_out,
        status=status,
    )


def _service(records):
    repo = CountingRepo(records)
    clock = FixedClock(datetime(2025, 3, 31, 18, 0))
    queries = AttendanceQueryService(repo, clock=clock)
    return AttendanceReportService(queries, late_threshold=time(9, 0), clock=clock), repo


def test_report_rows_and_totals():
    svc, _ = _service(
        [
            _rec("E1", date(2025, 3, 3), time(8, 30), time(17, 30), AttendanceStatus.PRESENT, name="Ann"),
            _rec("E1", date(2025, 3, 4), time(9, 15), time(17, 0), AttendanceStatus.LATE, name="Ann"),
            _rec("E2", date(2025, 3, 3), time(22, 0), time(6, 0), AttendanceStatus.LATE, name="Bo", department=""),
            _rec("E2", date(2025, 3, 4), None, None, AttendanceStatus.ON_LEAVE, name="Bo", department=""),
        ]
    )

    report = svc.build_attendance_report(start=date(2025, 3, 1), end=date(2025, 3, 31))

    assert len(report.rows) == 4
    first = report.rows[0]
    assert first["work_date"] == "2025-03-04"
    overnight = next(r for r in report.rows if r["employee_id"] == "E2" and r["work_date"] == "2025-03-03")
    assert overnight["worked_hours"] == "08:00"
    assert overnight["department"] == "-"
    leave = next(r for r in report.rows if r["status"] == "on-leave")
    assert leave["check_in"] == "-" and leave["worked_hours"] == "00:00"

    assert [s["employee_id"] for s in report.summary] == ["E1", "E2"]
    assert report.summary[0]["total_hours"] == "16:45"
    assert report.summary[0]["overtime"] == 1
    assert report.summary[1]["total_minutes"] == 480


def test_report_forwards_filters():
    svc, repo = _service([])

    svc.build_attendance_report(start=date(2025, 3, 1), end=date(2025, 3, 31), employee_id="E9", department="HR")

    f = repo.queries[-1]
    assert (f.employee_id, f.department, f.start_date, f.end_date) == ("E9", "HR", date(2025, 3, 1), date(2025, 3, 31))


def test_monthly_stats_reads_one_snapshot():
    svc, repo = _service(
        [
            _rec("E1", date(2025, 3, 3), time(8, 0), time(17, 0), AttendanceStatus.PRESENT),
            _rec("E1", date(2025, 4, 1), time(8, 0), time(17, 0), AttendanceStatus.PRESENT),
        ]
    )

    stats = svc.monthly_stats("E1", 2025, 3)

    assert len(repo.queries) == 1
    assert stats.present == 1
    assert stats.working_days == 1
    assert stats.attendance_rate == 100.0


def test_late_arrivals_only_reads_late_days():
    svc, repo = _service(
        [
            _rec("E1", date(2025, 3, 3), time(9, 20), time(17, 0), AttendanceStatus.LATE),
            _rec("E1", date(2025, 3, 4), time(8, 0), time(17, 0), AttendanceStatus.PRESENT),
        ]
    )

    items = svc.late_arrivals(start=date(2025, 3, 1), end=date(2025, 3, 31))

    assert repo.queries[-1].statuses == frozenset({AttendanceStatus.LATE})
    assert len(items) == 1 and items[0].average_minutes_late == 20
