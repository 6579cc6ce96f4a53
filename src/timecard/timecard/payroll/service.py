from __future__ import annotations

import logging
from datetime import date
from itertools import groupby
from typing import Optional, Sequence

from ..clock.model import DayRecord
from ..clock.repository import AttendanceRepository
from ..common.datetime_utils import month_bounds
from ..common.validators import require_month, require_positive_id
from ..core.exceptions import DomainError, NotFoundError, PayProfileError, ValidationError
from ..holidays.calendar import FailOpenHolidayCalendar, HolidayCalendar
from ..staff.model import StaffPayProfile
from ..staff.repository import PayProfileRepository
from .calculator.factory import PayrollCalculatorFactory
from .model import PayrollLine, StaffPayrollSummary

logger = logging.getLogger("timecard.payroll")


def calculate(
    record: DayRecord,
    profile: StaffPayProfile,
    holidays: HolidayCalendar,
    *,
    factory: Optional[PayrollCalculatorFactory] = None,
) -> PayrollLine:
    """Derive the payroll line for one day record.

    Pure for a given record, profile and calendar. A failing holiday lookup
    counts as a regular day.
    """

    if profile is None:
        raise PayProfileError(f"no pay profile for staff {record.staff_id}")
    if profile.staff_id != record.staff_id:
        raise PayProfileError(f"pay profile of staff {profile.staff_id} used for staff {record.staff_id}")
    profile.validate()

    is_holiday = FailOpenHolidayCalendar(holidays).is_holiday(record.work_date)
    calculator = (factory or PayrollCalculatorFactory()).for_profile(profile)
    return calculator.calculate(record, profile, is_holiday=is_holiday)


class PayrollService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        profiles: PayProfileRepository,
        holidays: HolidayCalendar,
        *,
        factory: Optional[PayrollCalculatorFactory] = None,
    ):
        self._attendance = attendance
        self._profiles = profiles
        self._holidays = FailOpenHolidayCalendar(holidays)
        self._factory = factory or PayrollCalculatorFactory()

    def compute_payroll(
        self,
        month: str | date,
        *,
        staff_id: Optional[int] = None,
        store_id: Optional[int] = None,
    ) -> StaffPayrollSummary | list[StaffPayrollSummary]:
        """Monthly payroll for one staff member, or every staff member of a store.

        With ``staff_id`` a single summary is returned; with ``store_id`` one
        summary per staff member, ordered by staff id. A single staff member
        without a pay profile raises ``NotFoundError``. In the store form each
        staff member is computed independently: a missing or bad profile marks
        that summary with an error and the others are still produced.
        """

        if (staff_id is None) == (store_id is None):
            raise ValidationError("specify exactly one of staff_id or store_id")

        first_day = month.replace(day=1) if isinstance(month, date) else require_month(month)
        start, end = month_bounds(first_day)

        if staff_id is not None:
            staff_id = require_positive_id(staff_id, "staff_id")
            if self._profiles.get(staff_id) is None:
                raise NotFoundError(f"no pay profile for staff {staff_id}")
            records = self._attendance.list_day_records(start_date=start, end_date=end, staff_id=staff_id)
            return self._summarize(staff_id, first_day, records)

        store_id = require_positive_id(store_id, "store_id")
        records = self._attendance.list_day_records(start_date=start, end_date=end, store_id=store_id)
        records = sorted(records, key=lambda r: (r.staff_id, r.work_date))
        return [
            self._summarize(sid, first_day, list(group))
            for sid, group in groupby(records, key=lambda r: r.staff_id)
        ]

    def _summarize(self, staff_id: int, month: date, records: Sequence[DayRecord]) -> StaffPayrollSummary:
        try:
            profile = self._profiles.get(staff_id)
            lines = tuple(
                calculate(r, profile, self._holidays, factory=self._factory)
                for r in sorted(records, key=lambda r: r.work_date)
            )
        except (DomainError, ArithmeticError, TypeError, ValueError) as e:
            logger.exception("payroll failed for staff=%s month=%s", staff_id, month.strftime("%Y-%m"))
            return StaffPayrollSummary(staff_id=staff_id, month=month, error=str(e))

        return StaffPayrollSummary(staff_id=staff_id, month=month, lines=lines)
