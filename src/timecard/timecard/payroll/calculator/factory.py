from __future__ import annotations

from dataclasses import dataclass, field

from ...core.enums import EmployeeType
from ...staff.model import StaffPayProfile
from .base import PayrollCalculator
from .hourly_calculator import HourlyPayrollCalculator
from .monthly_calculator import MonthlyPayrollCalculator


@dataclass
class PayrollCalculatorFactory:
    """Factory Pattern: pick the pay rule for an employee type."""

    hourly: PayrollCalculator = field(default_factory=HourlyPayrollCalculator)
    monthly: PayrollCalculator = field(default_factory=MonthlyPayrollCalculator)

    def for_profile(self, profile: StaffPayProfile) -> PayrollCalculator:
        if EmployeeType(profile.employee_type) == EmployeeType.MONTHLY:
            return self.monthly
        return self.hourly
