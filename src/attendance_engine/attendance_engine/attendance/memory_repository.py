from __future__ import annotations

import threading
import uuid
from dataclasses import replace
from datetime import date
from typing import Optional, Sequence

from ..core.exceptions import DuplicateRecordError, RecordNotFound
from .model import AttendanceRecord, RecordFilter, RecordMutation
from .repository import AttendanceRepository


class InMemoryAttendanceRepository(AttendanceRepository):
    """Process-local store. Used by the tests and the ``memory`` backend."""

    def __init__(self, records: Sequence[AttendanceRecord] = ()):
        self._lock = threading.RLock()
        self._by_id: dict[str, AttendanceRecord] = {}
        for r in records:
            self.append(r)

    def _check_unique(self, candidate: AttendanceRecord, *, ignore_id: Optional[str] = None) -> None:
        for r in self._by_id.values():
            if r.record_id == ignore_id or r.employee_id != candidate.employee_id:
                continue
            if r.work_date == candidate.work_date:
                raise DuplicateRecordError(
                    f"record already exists for {candidate.employee_id} on {candidate.work_date.isoformat()}"
                )
            if candidate.is_open and r.is_open:
                raise DuplicateRecordError(f"{candidate.employee_id} already has an open record ({r.record_id})")

    def append(self, record: AttendanceRecord) -> AttendanceRecord:
        with self._lock:
            stored = replace(record, record_id=record.record_id or uuid.uuid4().hex)
            if stored.record_id in self._by_id:
                raise DuplicateRecordError(f"record id {stored.record_id} already used")
            self._check_unique(stored)
            self._by_id[stored.record_id] = stored
            return stored

    def find_open(self, employee_id: str, work_date: Optional[date] = None) -> Optional[AttendanceRecord]:
        with self._lock:
            for r in self._by_id.values():
                if r.employee_id == employee_id and r.is_open and (work_date is None or r.work_date == work_date):
                    return r
            return None

    def get_by_id(self, record_id: str) -> Optional[AttendanceRecord]:
        with self._lock:
            return self._by_id.get(record_id)

    def get_for_employee_and_date(self, employee_id: str, work_date: date) -> Optional[AttendanceRecord]:
        with self._lock:
            for r in self._by_id.values():
                if r.employee_id == employee_id and r.work_date == work_date:
                    return r
            return None

    def update(self, record_id: str, mutation: RecordMutation) -> AttendanceRecord:
        with self._lock:
            current = self._by_id.get(record_id)
            if current is None:
                raise RecordNotFound(f"attendance record {record_id} not found")
            updated = replace(current, **mutation.changes())
            self._check_unique(updated, ignore_id=record_id)
            self._by_id[record_id] = updated
            return updated

    def query(self, record_filter: RecordFilter) -> Sequence[AttendanceRecord]:
        with self._lock:
            return [r for r in self._by_id.values() if record_filter.matches(r)]
