from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Optional

from ...aggregation.aggregator import IntervalAggregator
from ...core.enums import AttendanceState, ClockEventType, DayRecordStatus
from ..model import BreakInterval, DayRecord
from .base import NOT_CLOCKED_IN, TransitionStrategy


class ClockOutTransition(TransitionStrategy):
    """Finalize the open interval, closing a break still in progress."""

    event_type = ClockEventType.OUT
    target_state = AttendanceState.CLOCKED_OUT
    rejections = {
        AttendanceState.CLOCKED_OUT: NOT_CLOCKED_IN,
    }

    def __init__(self, aggregator: IntervalAggregator):
        self._aggregator = aggregator

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

        breaks = record.break_intervals
        if record.open_break is not None:
            breaks = breaks[:-1] + (BreakInterval(start=record.open_break.start, end=at),)

        closed = replace(record, break_intervals=breaks)
        minutes = self._aggregator.current_interval(closed, end=at)
        return replace(
            closed,
            clock_out=at,
            status=DayRecordStatus.FINISHED,
            work_minutes=minutes.work_minutes,
            break_minutes=minutes.break_minutes,
            night_minutes=minutes.night_minutes,
        )
