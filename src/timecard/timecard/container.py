from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .aggregation.service import DayQueryService
from .clock.memory_repository import InMemoryAttendanceRepository
from .clock.mysql_attendance_repository import MySQLAttendanceRepository
from .clock.repository import AttendanceRepository
from .clock.service import AttendanceService
from .core.enums import DayBoundary
from .database.connection import DatabaseConnection, DBConfig
from .holidays.calendar import HolidayCalendar, JapaneseHolidayCalendar
from .holidays.mysql_holiday_calendar import MySQLHolidayCalendar
from .payroll.service import PayrollService
from .staff.memory_repository import InMemoryPayProfileRepository
from .staff.mysql_pay_profile_repository import MySQLPayProfileRepository
from .staff.repository import PayProfileRepository
from .workday.resolver import DayResolver

logger = logging.getLogger("timecard")


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]
    resolver: DayResolver

    attendance_repo: AttendanceRepository
    pay_profiles_repo: PayProfileRepository
    holidays: HolidayCalendar

    attendance_service: AttendanceService
    day_query_service: DayQueryService
    payroll_service: PayrollService


def build_container(
    *,
    db_config: Optional[dict] = None,
    storage_backend: str = "mysql",
    day_boundary: str = DayBoundary.JST_MIDNIGHT.value,
    holiday_source: str = "jpholiday",
) -> Container:
    resolver = DayResolver(DayBoundary(day_boundary))
    logger.warning(
        "work day boundary policy: %s (confirm with payroll owners before changing)", resolver.boundary.value
    )
    if resolver.boundary == DayBoundary.JST_MIDNIGHT:
        logger.warning(
            "clock-outs after midnight are rejected under %s; an overnight shift stays open and unpaid. "
            "Use %s for stores with overnight shifts.",
            DayBoundary.JST_MIDNIGHT.value,
            DayBoundary.EARLY_MORNING_CUTOFF.value,
        )

    conn = None
    if storage_backend == "memory":
        attendance_repo = InMemoryAttendanceRepository()
        pay_profiles_repo = InMemoryPayProfileRepository()
    elif storage_backend == "mysql":
        if db_config is None:
            raise ValueError("db_config is required for the mysql storage backend")
        conn = DatabaseConnection(DBConfig.from_dict(db_config))
        attendance_repo = MySQLAttendanceRepository(conn)
        pay_profiles_repo = MySQLPayProfileRepository(conn)
    else:
        raise ValueError(f"Unknown storage backend: {storage_backend!r}")

    if holiday_source == "mysql":
        if conn is None:
            raise ValueError("holiday_source=mysql requires the mysql storage backend")
        holidays = MySQLHolidayCalendar(conn)
    elif holiday_source == "jpholiday":
        holidays = JapaneseHolidayCalendar()
    else:
        raise ValueError(f"Unknown holiday source: {holiday_source!r}")

    attendance_service = AttendanceService(attendance_repo, resolver=resolver)
    day_query_service = DayQueryService(attendance_repo, holidays)
    payroll_service = PayrollService(attendance_repo, pay_profiles_repo, holidays)

    return Container(
        conn=conn,
        resolver=resolver,
        attendance_repo=attendance_repo,
        pay_profiles_repo=pay_profiles_repo,
        holidays=holidays,
        attendance_service=attendance_service,
        day_query_service=day_query_service,
        payroll_service=payroll_service,
    )
