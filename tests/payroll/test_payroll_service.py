from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, time
from decimal import Decimal

import pytest

from src.timecard.timecard.core.constants import JST
from src.timecard.timecard.core.enums import EmployeeType
from src.timecard.timecard.core.exceptions import NotFoundError, ValidationError
from src.timecard.timecard.holidays.calendar import StaticHolidayCalendar
from src.timecard.timecard.payroll.export import PAYROLL_COLUMNS, payroll_rows, summary_rows, summary_totals
from src.timecard.timecard.payroll.service import PayrollService
from src.timecard.timecard.staff.model import StaffPayProfile


def jst(*args) -> datetime:
    return datetime(*args, tzinfo=JST)


def work_day(svc, staff_id, day, start_hour=9, end_hour=18, store_id=1):
    svc.record_event(staff_id, store_id, "in", jst(2025, 1, day, start_hour, 0))
    svc.record_event(staff_id, store_id, "out", jst(2025, 1, day, end_hour, 0))


@pytest.fixture
def monthly_profile() -> StaffPayProfile:
    return StaffPayProfile(
        staff_id=2,
        store_id=1,
        employee_type=EmployeeType.MONTHLY,
        hourly_wage=Decimal(1500),
        scheduled_start=time(9, 0),
        scheduled_end=time(18, 0),
    )


def test_single_staff_month(attendance_service, attendance_repo, profiles_repo):
    work_day(attendance_service, 1, 6)
    work_day(attendance_service, 1, 7, 10, 15)
    payroll = PayrollService(attendance_repo, profiles_repo, StaticHolidayCalendar())

    summary = payroll.compute_payroll("2025-01", staff_id=1)

    assert summary.ok
    assert summary.month == date(2025, 1, 1)
    assert [line.work_date for line in summary.lines] == [date(2025, 1, 6), date(2025, 1, 7)]
    assert summary.total_work_minutes == 540 + 300
    assert summary.total_amount == Decimal(14000)


def test_days_outside_the_month_are_excluded(attendance_service, attendance_repo, profiles_repo):
    attendance_service.record_event(1, 1, "in", jst(2024, 12, 31, 9, 0))
    attendance_service.record_event(1, 1, "out", jst(2024, 12, 31, 12, 0))
    work_day(attendance_service, 1, 6)
    payroll = PayrollService(attendance_repo, profiles_repo, StaticHolidayCalendar())

    summary = payroll.compute_payroll(date(2025, 1, 15), staff_id=1)

    assert len(summary.lines) == 1


def test_store_payroll_groups_by_staff(attendance_service, attendance_repo, profiles_repo, monthly_profile):
    profiles_repo.save(monthly_profile)
    work_day(attendance_service, 2, 6, 9, 19)
    work_day(attendance_service, 1, 6)
    work_day(attendance_service, 3, 6, store_id=2)
    payroll = PayrollService(attendance_repo, profiles_repo, StaticHolidayCalendar())

    summaries = payroll.compute_payroll("2025-01", store_id=1)

    assert [s.staff_id for s in summaries] == [1, 2]
    assert summaries[0].total_amount == Decimal(9000)
    assert summaries[1].total_overtime_minutes == 60
    assert summaries[1].total_amount == Decimal("1875")


def test_missing_profile_fails_only_that_staff(attendance_service, attendance_repo, profiles_repo, caplog):
    work_day(attendance_service, 1, 6)
    work_day(attendance_service, 5, 6)
    payroll = PayrollService(attendance_repo, profiles_repo, StaticHolidayCalendar())

    with caplog.at_level("ERROR", logger="timecard.payroll"):
        summaries = payroll.compute_payroll("2025-01", store_id=1)

    by_staff = {s.staff_id: s for s in summaries}
    assert by_staff[1].ok
    assert not by_staff[5].ok
    assert "no pay profile" in by_staff[5].error
    assert by_staff[5].lines == ()
    assert "payroll failed for staff=5" in caplog.text


def test_invalid_profile_fails_only_that_staff(attendance_service, attendance_repo, profiles_repo, hourly_profile):
    profiles_repo.save(replace(hourly_profile, staff_id=2, hourly_wage=Decimal(-5)))
    work_day(attendance_service, 1, 6)
    work_day(attendance_service, 2, 6)
    payroll = PayrollService(attendance_repo, profiles_repo, StaticHolidayCalendar())

    summaries = payroll.compute_payroll("2025-01", store_id=1)

    assert [s.ok for s in summaries] == [True, False]


def test_holiday_from_calendar_adds_bonus(attendance_service, attendance_repo, profiles_repo):
    work_day(attendance_service, 1, 13, 9, 17)
    payroll = PayrollService(attendance_repo, profiles_repo, StaticHolidayCalendar.of([date(2025, 1, 13)]))

    line = payroll.compute_payroll("2025-01", staff_id=1).lines[0]

    assert line.is_holiday is True
    assert line.holiday_bonus == Decimal(800)
    assert line.total_amount == Decimal(8800)


@pytest.mark.parametrize("kwargs", [{}, {"staff_id": 1, "store_id": 1}])
def test_exactly_one_selector_is_required(attendance_repo, profiles_repo, kwargs):
    payroll = PayrollService(attendance_repo, profiles_repo, StaticHolidayCalendar())

    with pytest.raises(ValidationError):
        payroll.compute_payroll("2025-01", **kwargs)


@pytest.mark.parametrize("month", ["2025-13", "2025/01", "", "January"])
def test_malformed_month_is_rejected(attendance_repo, profiles_repo, month):
    payroll = PayrollService(attendance_repo, profiles_repo, StaticHolidayCalendar())

    with pytest.raises(ValidationError, match="YYYY-MM"):
        payroll.compute_payroll(month, staff_id=1)


def test_empty_store_month_returns_no_summaries(attendance_repo, profiles_repo):
    payroll = PayrollService(attendance_repo, profiles_repo, StaticHolidayCalendar())

    assert payroll.compute_payroll("2025-02", store_id=1) == []


def test_export_rows_follow_column_order(attendance_service, attendance_repo, profiles_repo):
    work_day(attendance_service, 1, 6)
    payroll = PayrollService(attendance_repo, profiles_repo, StaticHolidayCalendar())
    summary = payroll.compute_payroll("2025-01", staff_id=1)

    rows = payroll_rows(summary)

    assert tuple(rows[0]) == PAYROLL_COLUMNS
    assert rows[0]["date"] == "2025-01-06"
    assert rows[0]["total_amount"] == Decimal(9000)
    assert summary_totals(summary)["month"] == "2025-01"


def test_summary_rows_skip_failed_staff(attendance_service, attendance_repo, profiles_repo):
    work_day(attendance_service, 1, 6)
    work_day(attendance_service, 9, 6)
    payroll = PayrollService(attendance_repo, profiles_repo, StaticHolidayCalendar())

    rows = summary_rows(payroll.compute_payroll("2025-01", store_id=1))

    assert [r["staff_id"] for r in rows] == [1]


def test_single_staff_without_profile_is_not_found(attendance_service, attendance_repo, profiles_repo):
    work_day(attendance_service, 5, 6)
    payroll = PayrollService(attendance_repo, profiles_repo, StaticHolidayCalendar())

    with pytest.raises(NotFoundError, match="no pay profile for staff 5"):
        payroll.compute_payroll("2025-01", staff_id=5)
