from __future__ import annotations

from datetime import date

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone


class MySQLHolidayCalendar:
    """Holidays synced into the ``holidays_jp`` table."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def is_holiday(self, day: date) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT 1 AS hit FROM holidays_jp WHERE holiday_date=%s", (day,))
            return fetchone(cur) is not None

    def upsert(self, *, day: date, name: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO holidays_jp(holiday_date, name)
                VALUES(%s,%s)
                ON DUPLICATE KEY UPDATE name=VALUES(name)
                """,
                (day, name),
            )
