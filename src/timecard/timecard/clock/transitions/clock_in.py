from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Optional

from ...core.enums import AttendanceState, ClockEventType, DayRecordStatus
from ..model import DayRecord
from .base import ALREADY_CLOCKED_IN, TransitionStrategy


class ClockInTransition(TransitionStrategy):
    """Start the day's record, or reopen a finished one (re-entry)."""

    event_type = ClockEventType.IN
    target_state = AttendanceState.CLOCKED_IN
    rejections = {
        AttendanceState.CLOCKED_IN: ALREADY_CLOCKED_IN,
        AttendanceState.BREAKING: ALREADY_CLOCKED_IN,
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
        if record is None:
            return DayRecord(
                staff_id=staff_id,
                store_id=store_id,
                work_date=work_date,
                clock_in=at,
                clock_out=None,
                status=DayRecordStatus.WORKING,
                first_clock_in=at,
            )

        return replace(
            record,
            clock_in=at,
            clock_out=None,
            status=DayRecordStatus.WORKING,
            break_intervals=(),
            work_minutes=0,
            break_minutes=0,
            night_minutes=0,
            previous_work_minutes=record.previous_work_minutes + record.work_minutes,
            previous_break_minutes=record.previous_break_minutes + record.break_minutes,
            previous_night_minutes=record.previous_night_minutes + record.night_minutes,
            first_clock_in=record.day_first_clock_in,
        )
