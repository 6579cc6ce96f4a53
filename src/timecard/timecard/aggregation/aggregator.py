from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from ..clock.model import DayRecord
from ..common.datetime_utils import floor_minutes, now_jst, to_jst
from ..core.constants import NIGHT_END_HOUR, NIGHT_START_HOUR
from ..core.exceptions import ClockSkewError


@dataclass(frozen=True)
class DayAggregate:
    work_minutes: int
    break_minutes: int
    night_minutes: int


def is_night_hour(hour: int) -> bool:
    return hour >= NIGHT_START_HOUR or hour < NIGHT_END_HOUR


def night_minutes_between(start: datetime, end: datetime) -> int:
    """Night-window minutes in ``[start, end)``.

    Walks the span in clock-hour-aligned JST steps. A step counts in full when
    its start hour falls in the night window; the last step is clipped at
    ``end``.
    """

    cursor = to_jst(start)
    end = to_jst(end)
    night = timedelta(0)
    while cursor < end:
        next_hour = cursor.replace(minute=0, second=0, microsecond=0) + timedelta(hours=1)
        step_end = min(next_hour, end)
        if is_night_hour(cursor.hour):
            night += step_end - cursor
        cursor = next_hour
    return floor_minutes(night)


class IntervalAggregator:
    """Turn a DayRecord's intervals into worked/break/night minutes.

    This is the only place those figures are derived; the state machine
    stores its results at clock-out and payroll reads them back.
    """

    def current_interval(self, record: DayRecord, *, end: datetime) -> DayAggregate:
        """Minutes of the latest in/out interval only, measured up to ``end``."""

        end = to_jst(end)
        clock_in = to_jst(record.clock_in)
        if end < clock_in:
            raise ClockSkewError("aggregation end precedes clock-in")

        break_minutes = 0
        for interval in record.break_intervals:
            stop = to_jst(interval.end) if interval.end is not None else end
            start = to_jst(interval.start)
            if stop < start:
                raise ClockSkewError("break ends before it starts")
            break_minutes += floor_minutes(stop - start)

        elapsed = floor_minutes(end - clock_in)
        return DayAggregate(
            work_minutes=elapsed - break_minutes,
            break_minutes=break_minutes,
            night_minutes=night_minutes_between(clock_in, end),
        )

    def aggregate(self, record: DayRecord, *, now: Optional[datetime] = None) -> DayAggregate:
        """Whole-day minutes including intervals finished earlier that day.

        ``now`` closes an open interval or open break; it is ignored for a
        finished record.
        """

        if record.is_finished:
            end = record.clock_out
        else:
            end = now if now is not None else now_jst()

        current = self.current_interval(record, end=end)
        return DayAggregate(
            work_minutes=record.previous_work_minutes + current.work_minutes,
            break_minutes=record.previous_break_minutes + current.break_minutes,
            night_minutes=record.previous_night_minutes + current.night_minutes,
        )
