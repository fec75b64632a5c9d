from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..container import Container
from ..core.enums import AttendanceStatus, SortOrder
from ..core.exceptions import ValidationError
from .model import RecordFilter


def _json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def _text(data: dict, key: str) -> str:
    value = data.get(key)
    return "" if value is None else str(value).strip()


def _optional_date(name: str):
    value = request.args.get(name)
    return parse_iso_date(value) if value else None


def _int_arg(name: str, default: int) -> int:
    value = request.args.get(name)
    if value in (None, ""):
        return default
    try:
        return int(value)
    except ValueError:
        raise ValidationError(f"{name} must be an integer")


def _status(value: str) -> AttendanceStatus:
    try:
        return AttendanceStatus(value)
    except ValueError:
        raise ValidationError(f"Unknown status: {value!r}")


def _order(default: SortOrder) -> SortOrder:
    value = request.args.get("order")
    if not value:
        return default
    try:
        return SortOrder(value)
    except ValueError:
        raise ValidationError("order must be 'asc' or 'desc'")


def register(app: Flask, container: Container) -> None:
    def _year_month() -> tuple[int, int]:
        now = container.clock.now()
        return _int_arg("year", now.year), _int_arg("month", now.month)

    def _range():
        start = _optional_date("start")
        end = _optional_date("end")
        if start is None or end is None:
            today = container.clock.now().date()
            end = end or today
            start = start or end.replace(day=1)
        if end < start:
            raise ValidationError("end must be >= start")
        return start, end

    @app.route("/api/attendance/check-in", methods=["POST"], endpoint="api_check_in")
    def api_check_in():
        data = _json_body()
        view = container.attendance_service.check_in(
            _text(data, "employee_id"),
            name=_text(data, "name"),
            department=_text(data, "department"),
        )
        return jsonify({"success": True, "record": view.as_dict()}), 201

    @app.route("/api/attendance/check-out", methods=["POST"], endpoint="api_check_out")
    def api_check_out():
        data = _json_body()
        view = container.attendance_service.check_out(_text(data, "employee_id"), _text(data, "record_id"))
        return jsonify({"success": True, "record": view.as_dict()}), 200

    @app.route("/api/attendance/overrides", methods=["POST"], endpoint="api_seed_override")
    def api_seed_override():
        """Weekend/leave/mission days pushed by the schedule and approval collaborators."""
        data = _json_body()
        view = container.attendance_service.seed_override(
            _text(data, "employee_id"),
            parse_iso_date(_text(data, "date")),
            _status(_text(data, "status")),
            name=_text(data, "name"),
            department=_text(data, "department"),
            check_in=data.get("check_in"),
            check_out=data.get("check_out"),
            notes=data.get("notes"),
        )
        return jsonify({"success": True, "record": view.as_dict()}), 201

    @app.route("/api/attendance/absences", methods=["POST"], endpoint="api_mark_absent")
    def api_mark_absent():
        data = _json_body()
        view = container.attendance_service.mark_absent(
            _text(data, "employee_id"),
            parse_iso_date(_text(data, "date")),
            name=_text(data, "name"),
            department=_text(data, "department"),
        )
        return jsonify({"success": True, "record": view.as_dict()}), 201

    @app.route("/api/attendance/records/<record_id>/correction", methods=["POST"], endpoint="api_correct_record")
    def api_correct_record(record_id: str):
        data = _json_body()
        view = container.attendance_service.correct_record(
            record_id,
            corrected_by=_text(data, "corrected_by"),
            check_in=data.get("check_in"),
            check_out=data.get("check_out"),
            notes=data.get("notes"),
        )
        return jsonify({"success": True, "record": view.as_dict()}), 200

    @app.route("/api/attendance/records", methods=["GET"], endpoint="api_query_records")
    def api_query_records():
        statuses = frozenset(_status(s.strip()) for s in (request.args.get("status") or "").split(",") if s.strip())
        record_filter = RecordFilter(
            employee_id=request.args.get("employee_id") or None,
            department=request.args.get("department") or None,
            work_date=_optional_date("date"),
            start_date=_optional_date("start"),
            end_date=_optional_date("end"),
            statuses=statuses,
        )
        views = container.query_service.query(record_filter, _order(SortOrder.NEWEST_FIRST))
        return jsonify({"success": True, "records": [v.as_dict() for v in views]})

    @app.route("/api/attendance/recent", methods=["GET"], endpoint="api_recent_activity")
    def api_recent_activity():
        views = container.query_service.recent_activity(
            _int_arg("limit", 30),
            department=request.args.get("department") or None,
        )
        return jsonify({"success": True, "records": [v.as_dict() for v in views]})

    @app.route("/api/attendance/employees/<employee_id>/records", methods=["GET"], endpoint="api_employee_records")
    def api_employee_records(employee_id: str):
        views = container.query_service.employee_records(employee_id)
        return jsonify({"success": True, "records": [v.as_dict() for v in views]})

    @app.route("/api/attendance/employees/<employee_id>/today", methods=["GET"], endpoint="api_today_record")
    def api_today_record(employee_id: str):
        view = container.query_service.today_record(employee_id)
        return jsonify({"success": True, "record": view.as_dict() if view else None})

    @app.route("/api/attendance/employees/<employee_id>/monthly", methods=["GET"], endpoint="api_monthly_records")
    def api_monthly_records(employee_id: str):
        year, month = _year_month()
        views = container.report_service.monthly_records(employee_id, year, month)
        return jsonify({"success": True, "year": year, "month": month, "records": [v.as_dict() for v in views]})

    @app.route("/api/attendance/employees/<employee_id>/stats", methods=["GET"], endpoint="api_monthly_stats")
    def api_monthly_stats(employee_id: str):
        year, month = _year_month()
        stats = container.report_service.monthly_stats(employee_id, year, month)
        return jsonify({"success": True, "stats": stats.as_dict()})

    @app.route("/api/attendance/late-arrivals", methods=["GET"], endpoint="api_late_arrivals")
    def api_late_arrivals():
        start, end = _range()
        items = container.report_service.late_arrivals(
            start=start, end=end, department=request.args.get("department") or None
        )
        return jsonify(
            {
                "success": True,
                "start": start.isoformat(),
                "end": end.isoformat(),
                "employees": [s.as_dict() for s in items],
            }
        )

    @app.route("/api/attendance/departments", methods=["GET"], endpoint="api_department_breakdown")
    def api_department_breakdown():
        start, end = _range()
        return jsonify({"success": True, "departments": container.report_service.department_breakdown(start=start, end=end)})

    @app.route("/api/attendance/report", methods=["GET"], endpoint="api_attendance_report")
    def api_attendance_report():
        start, end = _range()
        data = container.report_service.build_attendance_report(
            start=start,
            end=end,
            employee_id=request.args.get("employee_id") or None,
            department=request.args.get("department") or None,
        )
        return jsonify({"success": True, "rows": data.rows, "summary": data.summary})
