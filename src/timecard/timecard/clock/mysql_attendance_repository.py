from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from datetime import date, datetime
from typing import Any, Iterator, Optional, Sequence

from ..common.datetime_utils import parse_iso_datetime
from ..core.enums import ClockEventType, DayRecordStatus
from ..core.exceptions import ConcurrentUpdateError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, from_db_datetime, to_db_datetime
from .model import BreakInterval, ClockEvent, DayRecord
from .repository import AttendanceRepository

logger = logging.getLogger("timecard.clock")

_LOCK_PREFIX = "timecard-staff-"
_EVENT_COLUMNS = "event_id, staff_id, store_id, event_type, event_time, work_date"
_RECORD_COLUMNS = """
    staff_id, store_id, work_date, clock_in, clock_out, first_clock_in, status, break_intervals,
    work_minutes, break_minutes, night_minutes,
    previous_work_minutes, previous_break_minutes, previous_night_minutes
"""


def _dump_breaks(intervals: Sequence[BreakInterval]) -> str:
    return json.dumps(
        [
            [to_db_datetime(b.start).isoformat(), to_db_datetime(b.end).isoformat() if b.end else None]
            for b in intervals
        ]
    )


def _load_breaks(raw: Any) -> tuple[BreakInterval, ...]:
    if isinstance(raw, (bytes, bytearray)):
        raw = raw.decode("utf-8")
    items = json.loads(raw) if isinstance(raw, str) else (raw or [])
    return tuple(
        BreakInterval(start=parse_iso_datetime(start), end=parse_iso_datetime(end) if end else None)
        for start, end in items
    )


def _to_event(r: dict) -> ClockEvent:
    return ClockEvent(
        event_id=int(r["event_id"]),
        staff_id=int(r["staff_id"]),
        store_id=int(r["store_id"]),
        type=ClockEventType(r["event_type"]),
        timestamp=from_db_datetime(r["event_time"]),
        work_date=r["work_date"],
    )


def _to_record(r: dict) -> DayRecord:
    return DayRecord(
        staff_id=int(r["staff_id"]),
        store_id=int(r["store_id"]),
        work_date=r["work_date"],
        clock_in=from_db_datetime(r["clock_in"]),
        clock_out=from_db_datetime(r.get("clock_out")),
        first_clock_in=from_db_datetime(r.get("first_clock_in")),
        status=DayRecordStatus(r["status"]),
        break_intervals=_load_breaks(r.get("break_intervals")),
        work_minutes=int(r.get("work_minutes") or 0),
        break_minutes=int(r.get("break_minutes") or 0),
        night_minutes=int(r.get("night_minutes") or 0),
        previous_work_minutes=int(r.get("previous_work_minutes") or 0),
        previous_break_minutes=int(r.get("previous_break_minutes") or 0),
        previous_night_minutes=int(r.get("previous_night_minutes") or 0),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection, *, lock_timeout: int = 10):
        self._conn_factory = conn_factory
        self._lock_timeout = lock_timeout

    @contextmanager
    def staff_lock(self, staff_id: int) -> Iterator[None]:
        # Named locks are server-wide, so every worker process sees the same one.
        name = f"{_LOCK_PREFIX}{int(staff_id)}"
        conn = self._conn_factory.connect()
        try:
            cur = conn.cursor()
            try:
                cur.execute("SELECT GET_LOCK(%s, %s)", (name, self._lock_timeout))
                row = cur.fetchone()
                if not row or row[0] != 1:
                    logger.warning("staff lock %s not acquired within %ss", name, self._lock_timeout)
                    raise ConcurrentUpdateError(f"staff {staff_id} is being updated by another request")
                try:
                    yield
                finally:
                    cur.execute("SELECT RELEASE_LOCK(%s)", (name,))
                    cur.fetchone()
            finally:
                cur.close()
        finally:
            conn.close()

    def latest_event_for_staff(self, staff_id: int) -> Optional[ClockEvent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_EVENT_COLUMNS}
                FROM clock_events
                WHERE staff_id=%s
                ORDER BY event_time DESC, event_id DESC
                LIMIT 1
                """,
                (staff_id,),
            )
            r = fetchone(cur)
            return _to_event(r) if r else None

    def list_events(self, staff_id: int, work_date: date) -> Sequence[ClockEvent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_EVENT_COLUMNS}
                FROM clock_events
                WHERE staff_id=%s AND work_date=%s
                ORDER BY event_time ASC, event_id ASC
                """,
                (staff_id, work_date),
            )
            return [_to_event(r) for r in fetchall(cur)]

    def get_day_record(self, staff_id: int, work_date: date) -> Optional[DayRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_RECORD_COLUMNS}
                FROM day_records
                WHERE staff_id=%s AND work_date=%s
                """,
                (staff_id, work_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def commit_event(
        self,
        *,
        staff_id: int,
        store_id: int,
        event_type: ClockEventType,
        timestamp: datetime,
        record: DayRecord,
    ) -> ClockEvent:
        # Both statements share one connection, so they commit or roll back together.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO clock_events(staff_id, store_id, event_type, event_time, work_date)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (staff_id, store_id, event_type.value, to_db_datetime(timestamp), record.work_date),
            )
            event_id = int(cur.lastrowid)

            cur.execute(
                """
                INSERT INTO day_records(
                    staff_id, store_id, work_date, clock_in, clock_out, first_clock_in, status,
                    break_intervals, work_minutes, break_minutes, night_minutes,
                    previous_work_minutes, previous_break_minutes, previous_night_minutes
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    clock_in=VALUES(clock_in),
                    clock_out=VALUES(clock_out),
                    first_clock_in=VALUES(first_clock_in),
                    status=VALUES(status),
                    break_intervals=VALUES(break_intervals),
                    work_minutes=VALUES(work_minutes),
                    break_minutes=VALUES(break_minutes),
                    night_minutes=VALUES(night_minutes),
                    previous_work_minutes=VALUES(previous_work_minutes),
                    previous_break_minutes=VALUES(previous_break_minutes),
                    previous_night_minutes=VALUES(previous_night_minutes)
                """,
                (
                    record.staff_id,
                    record.store_id,
                    record.work_date,
                    to_db_datetime(record.clock_in),
                    to_db_datetime(record.clock_out),
                    to_db_datetime(record.first_clock_in),
                    record.status.value,
                    _dump_breaks(record.break_intervals),
                    record.work_minutes,
                    record.break_minutes,
                    record.night_minutes,
                    record.previous_work_minutes,
                    record.previous_break_minutes,
                    record.previous_night_minutes,
                ),
            )

        return ClockEvent(
            event_id=event_id,
            staff_id=staff_id,
            store_id=store_id,
            type=event_type,
            timestamp=timestamp,
            work_date=record.work_date,
        )

    def list_day_records(
        self,
        *,
        start_date: date,
        end_date: date,
        staff_id: Optional[int] = None,
        store_id: Optional[int] = None,
    ) -> Sequence[DayRecord]:
        clauses = ["work_date BETWEEN %s AND %s"]
        params: list[object] = [start_date, end_date]

        if staff_id is not None:
            clauses.append("staff_id=%s")
            params.append(int(staff_id))
        if store_id is not None:
            clauses.append("store_id=%s")
            params.append(int(store_id))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_RECORD_COLUMNS}
                FROM day_records
                WHERE {where}
                ORDER BY staff_id ASC, work_date ASC
                """,
                tuple(params),
            )
            return [_to_record(r) for r in fetchall(cur)]
