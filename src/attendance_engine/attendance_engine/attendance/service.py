from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from ..common.clock import Clock, SystemClock
from ..common.datetime_utils import ClockValue, format_clock, parse_clock
from ..common.locks import KeyedLock
from ..common.validators import optional_text, require_non_empty
from ..core.enums import AttendanceStatus
from ..core.exceptions import (
    AlreadyCheckedIn,
    AlreadyCheckedOut,
    AlreadyCompletedToday,
    ConflictError,
    DuplicateRecordError,
    OverrideLocked,
    RecordNotFound,
    ValidationError,
)
from .classifier import StatusClassifier
from .model import AttendanceRecord, AttendanceView, RecordMutation
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Check-in/check-out state machine: NoRecord -> CheckedIn -> CheckedOut.

    All writes for one employee run under that employee's lock. Every business
    rule is checked before the store is touched, so a rejected call leaves the
    store unchanged. Store failures propagate untouched (no internal retry).
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        *,
        classifier: StatusClassifier | None = None,
        clock: Clock | None = None,
        locks: KeyedLock | None = None,
    ):
        self._attendance = attendance
        self._classifier = classifier or StatusClassifier()
        self._clock = clock or SystemClock()
        self._locks = locks or KeyedLock()

    @property
    def policy(self):
        return self._classifier.policy

    def view(self, record: AttendanceRecord) -> AttendanceView:
        return AttendanceView.of(record, standard_day_hours=self.policy.standard_day_hours)

    def check_in(self, employee_id: str, *, name: str = "", department: str = "") -> AttendanceView:
        employee_id = require_non_empty(employee_id, "employee_id")
        now = self._clock.now()
        today = now.date()
        at = now.time().replace(second=0, microsecond=0)

        with self._locks.hold(employee_id):
            open_record = self._attendance.find_open(employee_id)
            if open_record is not None:
                logger.warning("check-in rejected for %s: record %s still open", employee_id, open_record.record_id)
                raise AlreadyCheckedIn("You have already checked in")

            existing = self._attendance.get_for_employee_and_date(employee_id, today)
            if existing is not None:
                if existing.status.is_override:
                    logger.warning("check-in rejected for %s: %s is %s", employee_id, today, existing.status.value)
                    raise OverrideLocked(f"{today.isoformat()} is recorded as {existing.status.value}")
                logger.warning("check-in rejected for %s: %s already completed", employee_id, today)
                raise AlreadyCompletedToday("You have already checked in and out today")

            decision = self._classifier.on_check_in(at)
            record = AttendanceRecord(
                record_id="",
                employee_id=employee_id,
                employee_name=(name or "").strip(),
                department=(department or "").strip(),
                work_date=today,
                check_in=at,
                check_out=None,
                status=decision.status,
                created_at=now,
                updated_at=now,
            )
            try:
                stored = self._attendance.append(record)
            except DuplicateRecordError as e:
                # Another writer won the race at the storage boundary.
                logger.warning("check-in for %s rejected by store: %s", employee_id, e)
                raise AlreadyCheckedIn("You have already checked in") from e

        logger.info(
            "check-in %s on %s at %s -> %s%s",
            employee_id,
            today,
            format_clock(at),
            stored.status.value,
            f" ({decision.note})" if decision.note else "",
        )
        return self.view(stored)

    def check_out(self, employee_id: str, record_id: str) -> AttendanceView:
        employee_id = require_non_empty(employee_id, "employee_id")
        record_id = require_non_empty(record_id, "record_id")
        now = self._clock.now()
        at = now.time().replace(second=0, microsecond=0)

        with self._locks.hold(employee_id):
            record = self._attendance.get_by_id(record_id)
            if record is None or record.employee_id != employee_id:
                logger.warning("check-out rejected for %s: record %s not found", employee_id, record_id)
                raise RecordNotFound("Attendance record not found")
            if record.status.is_override:
                logger.warning("check-out rejected for %s: record %s is %s", employee_id, record_id, record.status.value)
                raise OverrideLocked(f"{record.work_date.isoformat()} is recorded as {record.status.value}")
            if record.check_out is not None:
                logger.warning("check-out rejected for %s: record %s already closed", employee_id, record_id)
                raise AlreadyCheckedOut("You have already checked out")
            if record.check_in is None:
                raise RecordNotFound("Attendance record has no check-in")

            decision = self._classifier.on_check_out(record.status, at)
            updated = self._attendance.update(
                record_id,
                RecordMutation(check_out=at, status=decision.status, updated_at=now),
            )

        view = self.view(updated)
        logger.info(
            "check-out %s record %s at %s -> %s, worked %02d:%02d",
            employee_id,
            record_id,
            format_clock(at),
            updated.status.value,
            view.work_hours,
            view.work_minutes,
        )
        return view

    def seed_override(
        self,
        employee_id: str,
        work_date: date,
        status: AttendanceStatus,
        *,
        name: str = "",
        department: str = "",
        check_in: ClockValue = None,
        check_out: ClockValue = None,
        notes: Optional[str] = None,
    ) -> AttendanceView:
        """Pre-seed a weekend, leave or mission day.

        Used by the schedule and leave/mission approval collaborators. An
        existing closed record for the day is replaced in place; an open one is
        refused. Mission days may carry the worked times reported with the
        mission.
        """
        employee_id = require_non_empty(employee_id, "employee_id")
        status = AttendanceStatus(status)
        if not status.is_override:
            raise ValidationError(f"{status.value} cannot be seeded as an override")

        start = parse_clock(check_in)
        end = parse_clock(check_out)
        if (start is None) != (end is None):
            raise ValidationError("Override days need both check_in and check_out, or neither")
        resolved = self._classifier.classify(check_in=start, check_out=end, override=status)
        now = self._clock.now()

        with self._locks.hold(employee_id):
            existing = self._attendance.get_for_employee_and_date(employee_id, work_date)
            if existing is not None and existing.is_open:
                raise AlreadyCheckedIn(f"{work_date.isoformat()} has an open check-in")

            if existing is not None:
                stored = self._attendance.update(
                    existing.record_id,
                    RecordMutation(
                        check_in=start,
                        check_out=end,
                        status=resolved,
                        notes=optional_text(notes),
                        updated_at=now,
                    ),
                )
            else:
                stored = self._attendance.append(
                    AttendanceRecord(
                        record_id="",
                        employee_id=employee_id,
                        employee_name=(name or "").strip(),
                        department=(department or "").strip(),
                        work_date=work_date,
                        check_in=start,
                        check_out=end,
                        status=resolved,
                        notes=optional_text(notes),
                        created_at=now,
                        updated_at=now,
                    )
                )

        logger.info(
            "override %s for %s on %s%s",
            resolved.value,
            employee_id,
            work_date,
            f" (replaced {existing.status.value})" if existing is not None else "",
        )
        return self.view(stored)

    def mark_absent(self, employee_id: str, work_date: date, *, name: str = "", department: str = "") -> AttendanceView:
        """Record a past working day that has no check-in at all."""
        employee_id = require_non_empty(employee_id, "employee_id")
        now = self._clock.now()
        if work_date >= now.date():
            raise ValidationError("Absence can only be recorded for a past date")

        status = self._classifier.classify(check_in=None, is_past=True)
        with self._locks.hold(employee_id):
            if self._attendance.get_for_employee_and_date(employee_id, work_date) is not None:
                raise ConflictError(f"{employee_id} already has a record on {work_date.isoformat()}")
            try:
                stored = self._attendance.append(
                    AttendanceRecord(
                        record_id="",
                        employee_id=employee_id,
                        employee_name=(name or "").strip(),
                        department=(department or "").strip(),
                        work_date=work_date,
                        status=status,
                        created_at=now,
                        updated_at=now,
                    )
                )
            except DuplicateRecordError as e:
                raise ConflictError(f"{employee_id} already has a record on {work_date.isoformat()}") from e

        logger.info("absence recorded for %s on %s", employee_id, work_date)
        return self.view(stored)

    def correct_record(
        self,
        record_id: str,
        *,
        corrected_by: str,
        check_in: ClockValue = None,
        check_out: ClockValue = None,
        notes: Optional[str] = None,
    ) -> AttendanceView:
        """Administrative correction of a record's times.

        ``None`` keeps the stored value. The status is re-derived from the
        corrected times unless the day is an override.
        """
        corrected_by = require_non_empty(corrected_by, "corrected_by")
        record_id = require_non_empty(record_id, "record_id")
        requested_in = parse_clock(check_in)
        requested_out = parse_clock(check_out)
        if requested_in is None and requested_out is None and notes is None:
            raise ValidationError("Nothing to correct")

        owner = self._attendance.get_by_id(record_id)
        if owner is None:
            raise RecordNotFound("Attendance record not found")

        now = self._clock.now()
        with self._locks.hold(owner.employee_id):
            record = self._attendance.get_by_id(record_id)
            if record is None:
                raise RecordNotFound("Attendance record not found")

            new_in = requested_in or record.check_in
            new_out = requested_out or record.check_out
            if new_out is not None and new_in is None:
                raise ValidationError("check_out requires check_in")
            if record.status.is_override and (new_in is None) != (new_out is None):
                raise ValidationError("Override days need both check_in and check_out, or neither")

            if record.status.is_override:
                status = record.status
            else:
                status = self._classifier.classify(
                    check_in=new_in,
                    check_out=new_out,
                    is_past=record.work_date < now.date(),
                )

            changes = dict(check_in=new_in, check_out=new_out, status=status, updated_at=now)
            if notes is not None:
                changes["notes"] = optional_text(notes)
            try:
                updated = self._attendance.update(record_id, RecordMutation(**changes))
            except DuplicateRecordError as e:
                raise ConflictError(str(e)) from e

        logger.info(
            "record %s corrected by %s: %s-%s %s -> %s-%s %s",
            record.record_id,
            corrected_by,
            format_clock(record.check_in),
            format_clock(record.check_out),
            record.status.value,
            format_clock(updated.check_in),
            format_clock(updated.check_out),
            updated.status.value,
        )
        return self.view(updated)
