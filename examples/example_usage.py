"""Example: drive the engine through its services (no Flask, in-memory store).

Controllers are a thin layer; the rules live in the services.
"""

from datetime import date, datetime

from src.attendance_engine.attendance_engine.common.clock import FixedClock
from src.attendance_engine.attendance_engine.container import build_container
from src.attendance_engine.attendance_engine.core.enums import AttendanceStatus


class Settings:
    STORE_BACKEND = "memory"
    LATE_THRESHOLD = "09:00"
    STANDARD_END = "17:00"
    STANDARD_DAY_HOURS = 8


def main():
    clock = FixedClock(datetime(2025, 3, 3, 8, 0))
    container = build_container(Settings, clock=clock)
    svc = container.attendance_service

    rec = svc.check_in("EMP001", name="Ahmed", department="IT")
    clock.set(datetime(2025, 3, 3, 17, 0))
    print(svc.check_out("EMP001", rec.record.record_id).as_dict())

    clock.set(datetime(2025, 3, 4, 9, 15))
    rec = svc.check_in("EMP001", name="Ahmed", department="IT")
    clock.set(datetime(2025, 3, 4, 17, 0))
    svc.check_out("EMP001", rec.record.record_id)

    svc.seed_override("EMP001", date(2025, 3, 7), AttendanceStatus.WEEKEND, name="Ahmed", department="IT")

    print(container.report_service.monthly_stats("EMP001", 2025, 3).as_dict())


if __name__ == "__main__":
    main()
