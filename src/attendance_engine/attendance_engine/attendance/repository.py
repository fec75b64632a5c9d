from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord, RecordFilter, RecordMutation


class AttendanceRepository(Protocol):
    """Record Store contract.

    Implementations must enforce, at the storage boundary:
    - one record per (employee_id, work_date);
    - one open record (check-in without check-out) per employee;
    raising ``DuplicateRecordError`` otherwise. Reads must observe the
    caller's own earlier writes.
    """

    def append(self, record: AttendanceRecord) -> AttendanceRecord:
        """Store a new record; the store assigns ``record_id``."""

        raise NotImplementedError

    def find_open(self, employee_id: str, work_date: Optional[date] = None) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_by_id(self, record_id: str) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_for_employee_and_date(self, employee_id: str, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def update(self, record_id: str, mutation: RecordMutation) -> AttendanceRecord:
        raise NotImplementedError

    def query(self, record_filter: RecordFilter) -> Sequence[AttendanceRecord]:
        """Unordered snapshot of the matching records."""

        raise NotImplementedError
