from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Optional

from ...core.enums import AttendanceState, ClockEventType, DayRecordStatus
from ...core.exceptions import InvalidTransitionError
from ..model import BreakInterval, DayRecord
from .base import NOT_CLOCKED_IN, NOT_ON_BREAK, TransitionStrategy


class BreakEndTransition(TransitionStrategy):
    event_type = ClockEventType.BREAK_END
    target_state = AttendanceState.CLOCKED_IN
    rejections = {
        AttendanceState.CLOCKED_OUT: NOT_CLOCKED_IN,
        AttendanceState.CLOCKED_IN: NOT_ON_BREAK,
    }

    def apply(
        self,
        *,
        record: Optional[DayRecord],
        staff_id: int,
        store_id: int,
        work_date: date,
        at: datetime,
    ) -> DayRecord:
        record = self._require_record(record, AttendanceState.CLOCKED_OUT)
        current = record.open_break
        if current is None:
            raise InvalidTransitionError(NOT_ON_BREAK, state=AttendanceState.CLOCKED_IN, event_type=self.event_type)

        return replace(
            record,
            break_intervals=record.break_intervals[:-1] + (BreakInterval(start=current.start, end=at),),
            status=DayRecordStatus.WORKING,
        )
