from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class PayrollLine:
    """Payable amounts for one staff member on one work day.

    Always derived from a DayRecord and a pay profile; never stored as a
    source of truth.
    """

    staff_id: int
    work_date: date
    work_minutes: int
    night_minutes: int
    is_holiday: bool
    base_amount: Decimal
    night_bonus: Decimal
    holiday_bonus: Decimal
    overtime_minutes: int
    overtime_pay: Decimal
    total_amount: Decimal


@dataclass(frozen=True)
class StaffPayrollSummary:
    staff_id: int
    month: date
    lines: tuple[PayrollLine, ...] = ()
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def total_amount(self) -> Decimal:
        return sum((line.total_amount for line in self.lines), Decimal(0))

    @property
    def total_work_minutes(self) -> int:
        return sum(line.work_minutes for line in self.lines)

    @property
    def total_night_minutes(self) -> int:
        return sum(line.night_minutes for line in self.lines)

    @property
    def total_overtime_minutes(self) -> int:
        return sum(line.overtime_minutes for line in self.lines)
