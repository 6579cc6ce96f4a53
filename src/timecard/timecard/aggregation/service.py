from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..clock.repository import AttendanceRepository
from ..common.validators import require_positive_id
from ..holidays.calendar import FailOpenHolidayCalendar, HolidayCalendar
from .aggregator import IntervalAggregator


@dataclass(frozen=True)
class AggregatedDay:
    staff_id: int
    work_date: date
    work_minutes: int
    break_minutes: int
    night_minutes: int
    is_holiday: bool


class DayQueryService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        holidays: HolidayCalendar,
        *,
        aggregator: Optional[IntervalAggregator] = None,
    ):
        self._attendance = attendance
        self._holidays = FailOpenHolidayCalendar(holidays)
        self._aggregator = aggregator or IntervalAggregator()

    def get_aggregated_day(self, staff_id: int, work_date: date, *, now: Optional[datetime] = None) -> AggregatedDay:
        """Minutes for one staff member's work day; a day without a record is all zeros.

        ``now`` only matters while the day still has an open interval or break.
        """

        staff_id = require_positive_id(staff_id, "staff_id")
        is_holiday = self._holidays.is_holiday(work_date)

        record = self._attendance.get_day_record(staff_id, work_date)
        if record is None:
            return AggregatedDay(staff_id, work_date, 0, 0, 0, is_holiday)

        minutes = self._aggregator.aggregate(record, now=now)
        return AggregatedDay(
            staff_id=staff_id,
            work_date=work_date,
            work_minutes=minutes.work_minutes,
            break_minutes=minutes.break_minutes,
            night_minutes=minutes.night_minutes,
            is_holiday=is_holiday,
        )
