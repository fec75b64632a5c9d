from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.classifier import StatusClassifier
from .attendance.factory import AttendanceStrategyFactory
from .attendance.memory_repository import InMemoryAttendanceRepository
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.policy import AttendancePolicy
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .common.clock import Clock, SystemClock
from .core.exceptions import ValidationError
from .database.connection import DatabaseConnection, DBConfig
from .query.service import AttendanceQueryService
from .reporting.service import AttendanceReportService


@dataclass(frozen=True)
class Container:
    policy: AttendancePolicy
    clock: Clock

    attendance_repo: AttendanceRepository

    attendance_service: AttendanceService
    query_service: AttendanceQueryService
    report_service: AttendanceReportService


def build_attendance_repo(settings) -> AttendanceRepository:
    backend = str(getattr(settings, "STORE_BACKEND", "memory")).lower()
    if backend == "memory":
        return InMemoryAttendanceRepository()
    if backend == "mysql":
        config = DBConfig.from_dict(getattr(settings, "DB_CONFIG"))
        return MySQLAttendanceRepository(DatabaseConnection.get_instance(config))
    raise ValidationError(f"Unknown STORE_BACKEND: {backend!r}")


def build_container(
    settings,
    *,
    clock: Optional[Clock] = None,
    attendance_repo: Optional[AttendanceRepository] = None,
) -> Container:
    policy = AttendancePolicy.from_settings(settings)
    clock = clock or SystemClock(getattr(settings, "WORK_TIMEZONE", None) or None)
    attendance_repo = attendance_repo if attendance_repo is not None else build_attendance_repo(settings)

    classifier = StatusClassifier(policy, factory=AttendanceStrategyFactory())
    attendance_service = AttendanceService(attendance_repo, classifier=classifier, clock=clock)
    query_service = AttendanceQueryService(attendance_repo, standard_day_hours=policy.standard_day_hours, clock=clock)
    report_service = AttendanceReportService(query_service, late_threshold=policy.late_threshold, clock=clock)

    return Container(
        policy=policy,
        clock=clock,
        attendance_repo=attendance_repo,
        attendance_service=attendance_service,
        query_service=query_service,
        report_service=report_service,
    )
