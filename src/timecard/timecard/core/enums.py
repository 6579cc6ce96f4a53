from __future__ import annotations

from enum import Enum


class ClockEventType(str, Enum):
    """Closed set of clock actions a staff member can record."""

    IN = "in"
    OUT = "out"
    BREAK_START = "break_start"
    BREAK_END = "break_end"


class AttendanceState(str, Enum):
    """Presence state derived from the day's most recent clock event."""

    CLOCKED_OUT = "CLOCKED_OUT"
    CLOCKED_IN = "CLOCKED_IN"
    BREAKING = "BREAKING"


class DayRecordStatus(str, Enum):
    WORKING = "WORKING"
    ON_BREAK = "ON_BREAK"
    FINISHED = "FINISHED"


class EmployeeType(str, Enum):
    HOURLY = "hourly"
    MONTHLY = "monthly"


class DayBoundary(str, Enum):
    """Rule deciding which calendar date an instant is attributed to."""

    JST_MIDNIGHT = "jst_midnight"
    EARLY_MORNING_CUTOFF = "early_morning_cutoff"
