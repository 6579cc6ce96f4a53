from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceState, ClockEventType, DayRecordStatus


@dataclass(frozen=True)
class ClockEvent:
    """Domain entity: one recorded clock action (append-only)."""

    event_id: int
    staff_id: int
    store_id: int
    type: ClockEventType
    timestamp: datetime
    work_date: date


@dataclass(frozen=True)
class BreakInterval:
    start: datetime
    end: Optional[datetime] = None

    @property
    def is_open(self) -> bool:
        return self.end is None


@dataclass(frozen=True)
class DayRecord:
    """Domain entity: one staff member's presence on one logical work day.

    ``clock_in``, ``clock_out``, ``break_intervals`` and the unprefixed minute
    fields describe the current (latest) in/out interval. Minutes of intervals
    finished earlier the same day are carried in the ``previous_*`` fields.
    """

    staff_id: int
    store_id: int
    work_date: date
    clock_in: datetime
    clock_out: Optional[datetime]
    status: DayRecordStatus
    break_intervals: tuple[BreakInterval, ...] = ()
    work_minutes: int = 0
    break_minutes: int = 0
    night_minutes: int = 0
    previous_work_minutes: int = 0
    previous_break_minutes: int = 0
    previous_night_minutes: int = 0
    first_clock_in: Optional[datetime] = None

    @property
    def is_finished(self) -> bool:
        return self.clock_out is not None

    @property
    def open_break(self) -> Optional[BreakInterval]:
        if self.break_intervals and self.break_intervals[-1].is_open:
            return self.break_intervals[-1]
        return None

    @property
    def day_first_clock_in(self) -> datetime:
        return self.first_clock_in or self.clock_in

    @property
    def total_work_minutes(self) -> int:
        """Payable minutes of finished intervals."""
        if self.is_finished:
            return self.previous_work_minutes + self.work_minutes
        return self.previous_work_minutes

    @property
    def total_night_minutes(self) -> int:
        if self.is_finished:
            return self.previous_night_minutes + self.night_minutes
        return self.previous_night_minutes


@dataclass(frozen=True)
class CurrentState:
    """Read-model answering "what is this staff member doing right now"."""

    staff_id: int
    work_date: date
    state: AttendanceState
    last_clock_in: Optional[datetime] = None
    last_break_start: Optional[datetime] = None
