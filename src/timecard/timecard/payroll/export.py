from __future__ import annotations

from typing import Iterable

from .model import PayrollLine, StaffPayrollSummary

PAYROLL_COLUMNS = (
    "date",
    "work_minutes",
    "night_minutes",
    "is_holiday",
    "base_amount",
    "night_bonus",
    "holiday_bonus",
    "overtime_pay",
    "total_amount",
)


def line_row(line: PayrollLine) -> dict:
    return {
        "date": line.work_date.strftime("%Y-%m-%d"),
        "work_minutes": line.work_minutes,
        "night_minutes": line.night_minutes,
        "is_holiday": line.is_holiday,
        "base_amount": line.base_amount,
        "night_bonus": line.night_bonus,
        "holiday_bonus": line.holiday_bonus,
        "overtime_pay": line.overtime_pay,
        "total_amount": line.total_amount,
    }


def payroll_rows(summary: StaffPayrollSummary) -> list[dict]:
    """Flat rows, one per day, in ``PAYROLL_COLUMNS`` order."""
    return [line_row(line) for line in summary.lines]


def summary_rows(summaries: Iterable[StaffPayrollSummary]) -> list[dict]:
    """Flat rows for several staff members; failed summaries are skipped."""
    rows = []
    for summary in summaries:
        if not summary.ok:
            continue
        for row in payroll_rows(summary):
            rows.append({"staff_id": summary.staff_id, **row})
    return rows


def summary_totals(summary: StaffPayrollSummary) -> dict:
    return {
        "staff_id": summary.staff_id,
        "month": summary.month.strftime("%Y-%m"),
        "total_work_minutes": summary.total_work_minutes,
        "total_night_minutes": summary.total_night_minutes,
        "total_overtime_minutes": summary.total_overtime_minutes,
        "total_amount": summary.total_amount,
        "error": summary.error,
    }
