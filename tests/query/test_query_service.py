from __future__ import annotations

from datetime import date, datetime, time

import pytest

from src.attendance_engine.attendance_engine.attendance.memory_repository import InMemoryAttendanceRepository
from src.attendance_engine.attendance_engine.attendance.model import AttendanceRecord, RecordFilter
from src.attendance_engine.attendance_engine.common.clock import FixedClock
from src.attendance_engine.attendance_engine.core.enums import AttendanceStatus, SortOrder
from src.attendance_engine.attendance_engine.core.exceptions import ValidationError
from src.attendance_engine.attendance_engine.query.service import AttendanceQueryService


def _rec(employee_id, day, check_in=time(8, 0), check_out=time(17, 0), department="IT"):
    return AttendanceRecord(
        record_id="",
        employee_id=employee_id,
        work_date=day,
        status=AttendanceStatus.PRESENT,
        check_in=check_in,
        check_out=check_out,
        department=department,
    )


@pytest.fixture
def queries():
    repo = InMemoryAttendanceRepository(
        [
            _rec("E1", date(2025, 3, 5)),
            _rec("E1", date(2025, 2, 27)),
            _rec("E1", date(2025, 3, 3)),
            _rec("E2", date(2025, 3, 3), check_in=time(7, 0), department="HR"),
            _rec("E2", date(2025, 3, 4), department="HR"),
            _rec("E1", date(2025, 3, 10), check_out=None),
        ]
    )
    return AttendanceQueryService(repo, clock=FixedClock(datetime(2025, 3, 10, 12, 0)))


def test_employee_records_newest_first(queries):
    dates = [v.record.work_date for v in queries.employee_records("E1")]
    assert dates == [date(2025, 3, 10), date(2025, 3, 5), date(2025, 3, 3), date(2025, 2, 27)]


def test_monthly_records_oldest_first_within_month(queries):
    dates = [v.record.work_date for v in queries.monthly_records("E1", 2025, 3)]
    assert dates == [date(2025, 3, 3), date(2025, 3, 5), date(2025, 3, 10)]


def test_same_day_ties_broken_by_check_in(queries):
    views = queries.query(RecordFilter(work_date=date(2025, 3, 3)), SortOrder.OLDEST_FIRST)
    assert [v.record.employee_id for v in views] == ["E2", "E1"]


def test_recent_activity_is_limited_and_filterable(queries):
    recent = queries.recent_activity(2)
    assert [v.record.work_date for v in recent] == [date(2025, 3, 10), date(2025, 3, 5)]

    hr = queries.recent_activity(department="HR")
    assert {v.record.employee_id for v in hr} == {"E2"}
    assert queries.recent_activity(0) == []


def test_today_record(queries):
    today = queries.today_record("E1")
    assert today is not None and today.record.is_open
    assert queries.today_record("E2") is None


def test_views_carry_derived_fields(queries):
    view = queries.monthly_records("E1", 2025, 3)[0]
    assert view.as_dict()["work_hours"] == 9
    assert view.as_dict()["overtime"] == 1
    assert view.as_dict()["check_in"] == "08:00"


def test_invalid_arguments(queries):
    with pytest.raises(ValidationError):
        queries.monthly_records("E1", 2025, 13)
    with pytest.raises(ValidationError):
        queries.employee_records("")
