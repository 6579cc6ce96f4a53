from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Optional

from ...core.enums import AttendanceState, ClockEventType, DayRecordStatus
from ..model import BreakInterval, DayRecord
from .base import ALREADY_BREAKING, NOT_CLOCKED_IN, TransitionStrategy


class BreakStartTransition(TransitionStrategy):
    event_type = ClockEventType.BREAK_START
    target_state = AttendanceState.BREAKING
    rejections = {
        AttendanceState.CLOCKED_OUT: NOT_CLOCKED_IN,
        AttendanceState.BREAKING: ALREADY_BREAKING,
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
        return replace(
            record,
            break_intervals=record.break_intervals + (BreakInterval(start=at),),
            status=DayRecordStatus.ON_BREAK,
        )
