from __future__ import annotations

import threading
from datetime import date, datetime
from typing import ContextManager, Optional, Sequence

from ..core.enums import ClockEventType
from .locks import StaffLockRegistry
from .model import ClockEvent, DayRecord
from .repository import AttendanceRepository


class InMemoryAttendanceRepository(AttendanceRepository):
    """Process-local storage used by tests and the ``memory`` backend."""

    def __init__(self):
        self._events: dict[int, list[ClockEvent]] = {}
        self._records: dict[tuple[int, date], DayRecord] = {}
        self._next_id = 0
        self._write_lock = threading.Lock()
        self._staff_locks = StaffLockRegistry()

    def staff_lock(self, staff_id: int) -> ContextManager[None]:
        return self._staff_locks.hold(staff_id)

    def latest_event_for_staff(self, staff_id: int) -> Optional[ClockEvent]:
        events = self._events.get(staff_id)
        return events[-1] if events else None

    def list_events(self, staff_id: int, work_date: date) -> Sequence[ClockEvent]:
        return [e for e in self._events.get(staff_id, []) if e.work_date == work_date]

    def get_day_record(self, staff_id: int, work_date: date) -> Optional[DayRecord]:
        return self._records.get((staff_id, work_date))

    def commit_event(
        self,
        *,
        staff_id: int,
        store_id: int,
        event_type: ClockEventType,
        timestamp: datetime,
        record: DayRecord,
    ) -> ClockEvent:
        with self._write_lock:
            self._next_id += 1
            event = ClockEvent(
                event_id=self._next_id,
                staff_id=staff_id,
                store_id=store_id,
                type=event_type,
                timestamp=timestamp,
                work_date=record.work_date,
            )
            self._events.setdefault(staff_id, []).append(event)
            self._records[(staff_id, record.work_date)] = record
            return event

    def list_day_records(
        self,
        *,
        start_date: date,
        end_date: date,
        staff_id: Optional[int] = None,
        store_id: Optional[int] = None,
    ) -> Sequence[DayRecord]:
        items = [
            r
            for r in self._records.values()
            if start_date <= r.work_date <= end_date
            and (staff_id is None or r.staff_id == staff_id)
            and (store_id is None or r.store_id == store_id)
        ]
        items.sort(key=lambda r: (r.staff_id, r.work_date))
        return items
