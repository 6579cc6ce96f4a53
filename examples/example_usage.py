"""Example: drive the service layer directly (no Flask, in-memory storage)."""

from datetime import datetime
from decimal import Decimal

from src.timecard.timecard.container import build_container
from src.timecard.timecard.core.constants import JST
from src.timecard.timecard.core.enums import EmployeeType
from src.timecard.timecard.payroll.export import payroll_rows
from src.timecard.timecard.staff.model import StaffPayProfile


def main():
    container = build_container(storage_backend="memory")
    container.pay_profiles_repo.save(
        StaffPayProfile(staff_id=1, store_id=1, employee_type=EmployeeType.HOURLY, hourly_wage=Decimal(1200))
    )

    svc = container.attendance_service
    svc.record_event(1, 1, "in", datetime(2025, 1, 6, 20, 0, tzinfo=JST))
    svc.record_event(1, 1, "out", datetime(2025, 1, 6, 23, 30, tzinfo=JST))

    summary = container.payroll_service.compute_payroll("2025-01", staff_id=1)
    for row in payroll_rows(summary):
        print(row)


if __name__ == "__main__":
    main()
