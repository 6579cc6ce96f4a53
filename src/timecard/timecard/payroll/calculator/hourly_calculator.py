from __future__ import annotations

from decimal import Decimal

from ...clock.model import DayRecord
from ...core.constants import NIGHT_DIFFERENTIAL_RATE
from ...staff.model import StaffPayProfile
from ..model import PayrollLine
from .base import PayrollCalculator


class HourlyPayrollCalculator(PayrollCalculator):
    """Hourly rule: base + 25% night differential + per-hour holiday bonus."""

    def calculate(self, record: DayRecord, profile: StaffPayProfile, *, is_holiday: bool) -> PayrollLine:
        wage = profile.hourly_wage
        work_minutes = record.total_work_minutes
        # Break time spent inside the night window is not paid twice.
        night_minutes = min(record.total_night_minutes, work_minutes)
        regular_minutes = work_minutes - night_minutes

        base_amount = Decimal(regular_minutes) * wage / 60
        night_bonus = Decimal(night_minutes) * wage * NIGHT_DIFFERENTIAL_RATE / 60
        holiday_bonus = Decimal(0)
        if is_holiday:
            holiday_bonus = Decimal(work_minutes) * profile.holiday_bonus_per_hour / 60

        return PayrollLine(
            staff_id=record.staff_id,
            work_date=record.work_date,
            work_minutes=work_minutes,
            night_minutes=night_minutes,
            is_holiday=is_holiday,
            base_amount=base_amount,
            night_bonus=night_bonus,
            holiday_bonus=holiday_bonus,
            overtime_minutes=0,
            overtime_pay=Decimal(0),
            total_amount=base_amount + night_bonus + holiday_bonus,
        )
