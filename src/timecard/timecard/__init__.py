"""Timecard package.

Attendance state machine and time/payroll aggregation for hourly and
monthly staff, organized by feature modules (workday, clock, aggregation,
payroll, ...) with a thin Flask controller layer over service/repository
layers.
"""
