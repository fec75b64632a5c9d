from __future__ import annotations

from datetime import time
from typing import Optional, Sequence

from ..attendance.model import AttendanceRecord, AttendanceView, RecordFilter
from ..attendance.repository import AttendanceRepository
from ..common.clock import Clock, SystemClock
from ..common.datetime_utils import month_bounds
from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_HISTORY_LIMIT, DEFAULT_STANDARD_DAY_HOURS
from ..core.enums import SortOrder


def _sort_key(r: AttendanceRecord):
    return (r.work_date, r.check_in or time.min, r.record_id)


class AttendanceQueryService:
    """Read side used by list screens, history panels and monthly views.

    Ordering contract:
    - ``employee_records`` and ``recent_activity``: newest first;
    - ``monthly_records``: oldest first (date ascending);
    - ``query``: whatever the caller asks, newest first by default.
    Ties on the date are broken by check-in time, then record id.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        *,
        standard_day_hours: int = DEFAULT_STANDARD_DAY_HOURS,
        clock: Clock | None = None,
    ):
        self._attendance = attendance
        self._standard_day_hours = int(standard_day_hours)
        self._clock = clock or SystemClock()

    def _views(self, records: Sequence[AttendanceRecord], order: SortOrder) -> list[AttendanceView]:
        ordered = sorted(records, key=_sort_key, reverse=(SortOrder(order) == SortOrder.NEWEST_FIRST))
        return [AttendanceView.of(r, standard_day_hours=self._standard_day_hours) for r in ordered]

    def query(self, record_filter: RecordFilter, order: SortOrder = SortOrder.NEWEST_FIRST) -> list[AttendanceView]:
        return self._views(self._attendance.query(record_filter), order)

    def employee_records(self, employee_id: str) -> list[AttendanceView]:
        employee_id = require_non_empty(employee_id, "employee_id")
        return self.query(RecordFilter(employee_id=employee_id), SortOrder.NEWEST_FIRST)

    def monthly_records(self, employee_id: str, year: int, month: int) -> list[AttendanceView]:
        employee_id = require_non_empty(employee_id, "employee_id")
        start, end = month_bounds(year, month)
        return self.query(RecordFilter(employee_id=employee_id, start_date=start, end_date=end), SortOrder.OLDEST_FIRST)

    def recent_activity(self, limit: int = DEFAULT_HISTORY_LIMIT, *, department: Optional[str] = None) -> list[AttendanceView]:
        return self.query(RecordFilter(department=department), SortOrder.NEWEST_FIRST)[: max(int(limit), 0)]

    def today_record(self, employee_id: str) -> Optional[AttendanceView]:
        employee_id = require_non_empty(employee_id, "employee_id")
        record = self._attendance.get_for_employee_and_date(employee_id, self._clock.now().date())
        if record is None:
            return None
        return AttendanceView.of(record, standard_day_hours=self._standard_day_hours)
