from __future__ import annotations

from decimal import Decimal
from typing import Optional

from ..core.enums import EmployeeType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, normalize_mysql_time
from .model import StaffPayProfile
from .repository import PayProfileRepository

_COLUMNS = """
    staff_id, store_id, employee_type, hourly_wage, overtime_rate, holiday_bonus_per_hour,
    scheduled_start, scheduled_end, include_early_arrival_as_overtime
"""


def _to_profile(r: dict) -> StaffPayProfile:
    return StaffPayProfile(
        staff_id=int(r["staff_id"]),
        store_id=int(r["store_id"]),
        employee_type=EmployeeType(r["employee_type"]),
        hourly_wage=Decimal(r["hourly_wage"]),
        overtime_rate=Decimal(r["overtime_rate"]),
        holiday_bonus_per_hour=Decimal(r.get("holiday_bonus_per_hour") or 0),
        scheduled_start=normalize_mysql_time(r["scheduled_start"]),
        scheduled_end=normalize_mysql_time(r["scheduled_end"]),
        include_early_arrival_as_overtime=bool(r.get("include_early_arrival_as_overtime")),
    )


class MySQLPayProfileRepository(PayProfileRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, staff_id: int) -> Optional[StaffPayProfile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM staff_pay_profiles WHERE staff_id=%s", (staff_id,))
            r = fetchone(cur)
            return _to_profile(r) if r else None

    def save(self, profile: StaffPayProfile) -> None:
        profile.validate()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO staff_pay_profiles(
                    staff_id, store_id, employee_type, hourly_wage, overtime_rate, holiday_bonus_per_hour,
                    scheduled_start, scheduled_end, include_early_arrival_as_overtime
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    store_id=VALUES(store_id),
                    employee_type=VALUES(employee_type),
                    hourly_wage=VALUES(hourly_wage),
                    overtime_rate=VALUES(overtime_rate),
                    holiday_bonus_per_hour=VALUES(holiday_bonus_per_hour),
                    scheduled_start=VALUES(scheduled_start),
                    scheduled_end=VALUES(scheduled_end),
                    include_early_arrival_as_overtime=VALUES(include_early_arrival_as_overtime)
                """,
                (
                    profile.staff_id,
                    profile.store_id,
                    EmployeeType(profile.employee_type).value,
                    profile.hourly_wage,
                    profile.overtime_rate,
                    profile.holiday_bonus_per_hour,
                    profile.scheduled_start,
                    profile.scheduled_end,
                    int(profile.include_early_arrival_as_overtime),
                ),
            )
