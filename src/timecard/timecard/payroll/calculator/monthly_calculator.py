from __future__ import annotations

from decimal import Decimal

from ...clock.model import DayRecord
from ...common.datetime_utils import combine_jst, floor_minutes, to_jst
from ...staff.model import StaffPayProfile
from ..model import PayrollLine
from .base import PayrollCalculator


class MonthlyPayrollCalculator(PayrollCalculator):
    """Monthly rule: base salary is paid elsewhere, the day line is overtime only.

    Overtime is the time after the scheduled end, plus the time before the
    scheduled start when early arrival counts as overtime.
    """

    def overtime_minutes(self, record: DayRecord, profile: StaffPayProfile) -> int:
        if not record.is_finished:
            return 0

        scheduled_start = combine_jst(record.work_date, profile.scheduled_start)
        scheduled_end = combine_jst(record.work_date, profile.scheduled_end)

        minutes = 0
        clock_out = to_jst(record.clock_out)
        if clock_out > scheduled_end:
            minutes += floor_minutes(clock_out - scheduled_end)

        first_in = to_jst(record.day_first_clock_in)
        if profile.include_early_arrival_as_overtime and first_in < scheduled_start:
            minutes += floor_minutes(scheduled_start - first_in)
        return minutes

    def calculate(self, record: DayRecord, profile: StaffPayProfile, *, is_holiday: bool) -> PayrollLine:
        overtime_minutes = self.overtime_minutes(record, profile)
        overtime_pay = Decimal(overtime_minutes) * profile.hourly_wage * profile.overtime_rate / 60

        return PayrollLine(
            staff_id=record.staff_id,
            work_date=record.work_date,
            work_minutes=record.total_work_minutes,
            night_minutes=record.total_night_minutes,
            is_holiday=is_holiday,
            base_amount=Decimal(0),
            night_bonus=Decimal(0),
            holiday_bonus=Decimal(0),
            overtime_minutes=overtime_minutes,
            overtime_pay=overtime_pay,
            total_amount=overtime_pay,
        )
