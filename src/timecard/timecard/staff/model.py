from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from decimal import Decimal

from ..core.constants import DEFAULT_OVERTIME_RATE, DEFAULT_SCHEDULED_END, DEFAULT_SCHEDULED_START
from ..core.enums import EmployeeType
from ..core.exceptions import PayProfileError


@dataclass(frozen=True)
class StaffPayProfile:
    """Domain entity: how a staff member is paid."""

    staff_id: int
    store_id: int
    employee_type: EmployeeType
    hourly_wage: Decimal
    overtime_rate: Decimal = DEFAULT_OVERTIME_RATE
    holiday_bonus_per_hour: Decimal = Decimal(0)
    scheduled_start: time = DEFAULT_SCHEDULED_START
    scheduled_end: time = DEFAULT_SCHEDULED_END
    include_early_arrival_as_overtime: bool = False

    def validate(self) -> "StaffPayProfile":
        if self.hourly_wage is None or self.hourly_wage < 0:
            raise PayProfileError(f"staff {self.staff_id}: hourly wage must not be negative")
        if self.overtime_rate is None or self.overtime_rate <= 0:
            raise PayProfileError(f"staff {self.staff_id}: overtime rate must be positive")
        if self.holiday_bonus_per_hour is None or self.holiday_bonus_per_hour < 0:
            raise PayProfileError(f"staff {self.staff_id}: holiday bonus must not be negative")
        if self.employee_type == EmployeeType.MONTHLY and self.scheduled_end <= self.scheduled_start:
            raise PayProfileError(f"staff {self.staff_id}: scheduled end must be after scheduled start")
        return self
