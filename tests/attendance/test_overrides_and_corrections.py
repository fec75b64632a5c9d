from __future__ import annotations

from datetime import date, datetime, time

import pytest

from src.attendance_engine.attendance_engine.attendance.memory_repository import InMemoryAttendanceRepository
from src.attendance_engine.attendance_engine.attendance.model import RecordFilter
from src.attendance_engine.attendance_engine.attendance.service import AttendanceService
from src.attendance_engine.attendance_engine.common.clock import FixedClock
from src.attendance_engine.attendance_engine.core.enums import AttendanceStatus
from src.attendance_engine.attendance_engine.core.exceptions import (
    AlreadyCheckedIn,
    ConflictError,
    InvalidTimeFormat,
    OverrideLocked,
    RecordNotFound,
    ValidationError,
)


@pytest.fixture
def clock():
    return FixedClock(datetime(2025, 3, 10, 12, 0))


@pytest.fixture
def repo():
    return InMemoryAttendanceRepository()


@pytest.fixture
def svc(repo, clock):
    return AttendanceService(repo, clock=clock)


def test_seed_mission_day_keeps_reported_times(svc):
    view = svc.seed_override(
        "E1",
        date(2025, 3, 5),
        AttendanceStatus.MISSION,
        name="Ann",
        check_in="08:00",
        check_out="18:00",
        notes="Client visit",
    )

    assert view.record.status == AttendanceStatus.MISSION
    assert (view.work_hours, view.overtime) == (10, 2)
    assert view.record.notes == "Client visit"


def test_seed_override_replaces_closed_record_in_place(svc, repo, clock):
    clock.set(datetime(2025, 3, 10, 9, 30))
    opened = svc.check_in("E1")
    clock.set(datetime(2025, 3, 10, 17, 0))
    svc.check_out("E1", opened.record.record_id)

    view = svc.seed_override("E1", date(2025, 3, 10), AttendanceStatus.ON_LEAVE)

    records = list(repo.query(RecordFilter(employee_id="E1")))
    assert len(records) == 1
    assert records[0].record_id == opened.record.record_id
    assert view.record.status == AttendanceStatus.ON_LEAVE
    assert view.record.check_in is None and view.work_hours == 0


def test_seed_override_refuses_open_day(svc, clock):
    clock.set(datetime(2025, 3, 10, 8, 0))
    svc.check_in("E1")

    with pytest.raises(AlreadyCheckedIn):
        svc.seed_override("E1", date(2025, 3, 10), AttendanceStatus.MISSION)


@pytest.mark.parametrize("status", [AttendanceStatus.PRESENT, AttendanceStatus.LATE, AttendanceStatus.ABSENT])
def test_seed_override_rejects_derived_statuses(svc, status):
    with pytest.raises(ValidationError):
        svc.seed_override("E1", date(2025, 3, 5), status)


def test_seed_override_rejects_check_out_without_check_in(svc):
    with pytest.raises(ValidationError):
        svc.seed_override("E1", date(2025, 3, 5), AttendanceStatus.MISSION, check_out="17:00")


def test_mark_absent_for_past_day(svc):
    view = svc.mark_absent("E1", date(2025, 3, 7), department="IT")

    assert view.record.status == AttendanceStatus.ABSENT
    assert view.record.check_in is None
    assert view.as_dict()["work_hours"] == 0


def test_mark_absent_refuses_today_and_existing_days(svc):
    with pytest.raises(ValidationError):
        svc.mark_absent("E1", date(2025, 3, 10))

    svc.mark_absent("E1", date(2025, 3, 7))
    with pytest.raises(ConflictError):
        svc.mark_absent("E1", date(2025, 3, 7))


def test_correction_reclassifies_derived_status(svc, clock):
    clock.set(datetime(2025, 3, 10, 9, 20))
    opened = svc.check_in("E1")
    clock.set(datetime(2025, 3, 10, 17, 0))
    svc.check_out("E1", opened.record.record_id)

    corrected = svc.correct_record(opened.record.record_id, corrected_by="admin", check_in="08:50")

    assert corrected.record.check_in == time(8, 50)
    assert corrected.record.check_out == time(17, 0)
    assert corrected.record.status == AttendanceStatus.PRESENT
    assert (corrected.work_hours, corrected.work_minutes) == (8, 10)


def test_correction_keeps_override_status(svc):
    seeded = svc.seed_override("E1", date(2025, 3, 5), AttendanceStatus.MISSION, check_in="08:00", check_out="12:00")

    corrected = svc.correct_record(seeded.record.record_id, corrected_by="admin", check_out="16:00")

    assert corrected.record.status == AttendanceStatus.MISSION
    assert corrected.work_hours == 8


def test_correction_can_close_a_forgotten_check_out(svc, clock):
    clock.set(datetime(2025, 3, 7, 8, 0))
    opened = svc.check_in("E1")
    clock.set(datetime(2025, 3, 10, 8, 0))

    corrected = svc.correct_record(opened.record.record_id, corrected_by="admin", check_out="15:00")

    assert corrected.record.is_closed
    assert corrected.record.status == AttendanceStatus.EARLY_LEAVE
    # the employee can check in again once the stale record is closed
    assert svc.check_in("E1").record.work_date == date(2025, 3, 10)


def test_correction_rejections(svc):
    with pytest.raises(RecordNotFound):
        svc.correct_record("missing", corrected_by="admin", notes="x")

    seeded = svc.seed_override("E1", date(2025, 3, 5), AttendanceStatus.ON_LEAVE)
    with pytest.raises(ValidationError):
        svc.correct_record(seeded.record.record_id, corrected_by="admin")
    with pytest.raises(ValidationError):
        svc.correct_record(seeded.record.record_id, corrected_by="", notes="x")
    with pytest.raises(ValidationError):
        svc.correct_record(seeded.record.record_id, corrected_by="admin", check_out="17:00")
    with pytest.raises(InvalidTimeFormat):
        svc.correct_record(seeded.record.record_id, corrected_by="admin", check_in="25:00")


def test_seed_override_needs_both_times_or_neither(svc, repo, clock):
    with pytest.raises(ValidationError):
        svc.seed_override("E1", date(2025, 3, 5), AttendanceStatus.MISSION, check_in="08:00")
    assert list(repo.query(RecordFilter())) == []

    # the next working day is still open for a normal check-in
    clock.set(datetime(2025, 3, 6, 8, 0))
    assert svc.check_in("E1").record.status == AttendanceStatus.PRESENT


def test_check_out_refuses_override_days(svc, repo, clock):
    seeded = svc.seed_override("E1", date(2025, 3, 10), AttendanceStatus.MISSION, check_in="08:00", check_out="12:00")
    before = list(repo.query(RecordFilter()))

    clock.set(datetime(2025, 3, 10, 17, 0))
    with pytest.raises(OverrideLocked):
        svc.check_out("E1", seeded.record.record_id)
    assert list(repo.query(RecordFilter())) == before


def test_correction_cannot_leave_override_half_open(svc):
    seeded = svc.seed_override("E1", date(2025, 3, 5), AttendanceStatus.ON_LEAVE)

    with pytest.raises(ValidationError):
        svc.correct_record(seeded.record.record_id, corrected_by="admin", check_in="08:00")


def test_non_text_notes_are_stored_as_text(svc):
    view = svc.seed_override("E1", date(2025, 3, 5), AttendanceStatus.MISSION, notes=5)

    assert view.record.notes == "5"
