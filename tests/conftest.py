from __future__ import annotations

from datetime import datetime
from decimal import Decimal

import pytest

from src.timecard.timecard.clock.memory_repository import InMemoryAttendanceRepository
from src.timecard.timecard.clock.service import AttendanceService
from src.timecard.timecard.core.constants import JST
from src.timecard.timecard.core.enums import EmployeeType
from src.timecard.timecard.staff.memory_repository import InMemoryPayProfileRepository
from src.timecard.timecard.staff.model import StaffPayProfile


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2025, 1, 6, 9, 0, tzinfo=JST)


@pytest.fixture
def attendance_repo() -> InMemoryAttendanceRepository:
    return InMemoryAttendanceRepository()


@pytest.fixture
def attendance_service(attendance_repo) -> AttendanceService:
    return AttendanceService(attendance_repo)


@pytest.fixture
def hourly_profile() -> StaffPayProfile:
    return StaffPayProfile(
        staff_id=1,
        store_id=1,
        employee_type=EmployeeType.HOURLY,
        hourly_wage=Decimal(1000),
        holiday_bonus_per_hour=Decimal(100),
    )


@pytest.fixture
def profiles_repo(hourly_profile) -> InMemoryPayProfileRepository:
    return InMemoryPayProfileRepository([hourly_profile])
