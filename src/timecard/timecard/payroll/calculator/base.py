from __future__ import annotations

from abc import ABC, abstractmethod

from ...clock.model import DayRecord
from ...staff.model import StaffPayProfile
from ..model import PayrollLine


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll).

    Only finished intervals are payable; minutes of an interval that is still
    open are picked up once it is clocked out.
    """

    @abstractmethod
    def calculate(self, record: DayRecord, profile: StaffPayProfile, *, is_holiday: bool) -> PayrollLine:
        raise NotImplementedError
