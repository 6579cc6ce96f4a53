from __future__ import annotations

from datetime import date, datetime
from typing import ContextManager, Optional, Protocol, Sequence

from ..core.enums import ClockEventType
from .model import ClockEvent, DayRecord


class AttendanceRepository(Protocol):
    """Storage for the clock event log and the derived day records."""

    def staff_lock(self, staff_id: int) -> ContextManager[None]:
        """Critical section for one staff member's read-modify-write.

        Held across every process sharing this storage, so two writers for
        the same staff member never interleave.
        """

        raise NotImplementedError

    def latest_event_for_staff(self, staff_id: int) -> Optional[ClockEvent]:
        raise NotImplementedError

    def list_events(self, staff_id: int, work_date: date) -> Sequence[ClockEvent]:
        """Events of one staff member on one work day, oldest first."""

        raise NotImplementedError

    def get_day_record(self, staff_id: int, work_date: date) -> Optional[DayRecord]:
        raise NotImplementedError

    def commit_event(
        self,
        *,
        staff_id: int,
        store_id: int,
        event_type: ClockEventType,
        timestamp: datetime,
        record: DayRecord,
    ) -> ClockEvent:
        """Append the event and store ``record`` as one atomic write.

        Returns the appended event.
        """

        raise NotImplementedError

    def list_day_records(
        self,
        *,
        start_date: date,
        end_date: date,
        staff_id: Optional[int] = None,
        store_id: Optional[int] = None,
    ) -> Sequence[DayRecord]:
        """Day records in ``[start_date, end_date]`` ordered by staff, then date."""

        raise NotImplementedError
