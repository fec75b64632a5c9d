from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus
from ..core.exceptions import RecordNotFound
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time
from .model import AttendanceRecord, RecordFilter, RecordMutation
from .repository import AttendanceRepository

_COLUMNS = (
    "record_id, employee_id, employee_name, department, work_date, "
    "check_in, check_out, status, notes, created_at, updated_at"
)


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        record_id=str(r["record_id"]),
        employee_id=str(r["employee_id"]),
        employee_name=r.get("employee_name") or "",
        department=r.get("department") or "",
        work_date=r["work_date"],
        check_in=normalize_mysql_time(r.get("check_in")),
        check_out=normalize_mysql_time(r.get("check_out")),
        status=AttendanceStatus(r["status"]),
        notes=r.get("notes"),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    """Record Store on MySQL.

    Uniqueness (one row per employee/date, one open row per employee) is
    enforced by unique keys in ``database/schema.sql``; violations surface as
    ``DuplicateRecordError`` from ``db_cursor``.
    """

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def append(self, record: AttendanceRecord) -> AttendanceRecord:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records(
                    employee_id, employee_name, department, work_date,
                    check_in, check_out, status, notes, created_at, updated_at
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    record.employee_id,
                    record.employee_name,
                    record.department,
                    record.work_date,
                    record.check_in,
                    record.check_out,
                    record.status.value,
                    record.notes,
                    record.created_at,
                    record.updated_at,
                ),
            )
            return replace(record, record_id=str(cur.lastrowid))

    def find_open(self, employee_id: str, work_date: Optional[date] = None) -> Optional[AttendanceRecord]:
        clauses = ["employee_id=%s", "check_in IS NOT NULL", "check_out IS NULL"]
        params: list[object] = [employee_id]
        if work_date is not None:
            clauses.append("work_date=%s")
            params.append(work_date)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE {' AND '.join(clauses)} LIMIT 1",
                tuple(params),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def get_by_id(self, record_id: str) -> Optional[AttendanceRecord]:
        if not str(record_id).isdigit():
            return None
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_records WHERE record_id=%s", (int(record_id),))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def get_for_employee_and_date(self, employee_id: str, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE employee_id=%s AND work_date=%s",
                (employee_id, work_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def update(self, record_id: str, mutation: RecordMutation) -> AttendanceRecord:
        if not str(record_id).isdigit():
            raise RecordNotFound(f"attendance record {record_id} not found")

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE record_id=%s FOR UPDATE",
                (int(record_id),),
            )
            r = fetchone(cur)
            if not r:
                raise RecordNotFound(f"attendance record {record_id} not found")

            updated = replace(_to_record(r), **mutation.changes())
            cur.execute(
                """
                UPDATE attendance_records
                SET check_in=%s, check_out=%s, status=%s, notes=%s, updated_at=%s
                WHERE record_id=%s
                """,
                (
                    updated.check_in,
                    updated.check_out,
                    updated.status.value,
                    updated.notes,
                    updated.updated_at,
                    int(record_id),
                ),
            )
            return updated

    def query(self, record_filter: RecordFilter) -> Sequence[AttendanceRecord]:
        clauses: list[str] = []
        params: list[object] = []

        if record_filter.employee_id is not None:
            clauses.append("employee_id=%s")
            params.append(record_filter.employee_id)
        if record_filter.department is not None:
            clauses.append("department=%s")
            params.append(record_filter.department)
        if record_filter.work_date is not None:
            clauses.append("work_date=%s")
            params.append(record_filter.work_date)
        if record_filter.start_date is not None:
            clauses.append("work_date>=%s")
            params.append(record_filter.start_date)
        if record_filter.end_date is not None:
            clauses.append("work_date<=%s")
            params.append(record_filter.end_date)
        if record_filter.statuses:
            statuses = sorted(s.value for s in record_filter.statuses)
            clauses.append(f"status IN ({', '.join(['%s'] * len(statuses))})")
            params.extend(statuses)

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_records {where}", tuple(params))
            return [_to_record(r) for r in fetchall(cur)]
