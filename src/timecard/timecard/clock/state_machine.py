from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import AttendanceState, ClockEventType
from .factory import TransitionStrategyFactory
from .model import ClockEvent, DayRecord

STATE_AFTER_EVENT = {
    ClockEventType.IN: AttendanceState.CLOCKED_IN,
    ClockEventType.BREAK_END: AttendanceState.CLOCKED_IN,
    ClockEventType.BREAK_START: AttendanceState.BREAKING,
    ClockEventType.OUT: AttendanceState.CLOCKED_OUT,
}


def derive_state(events: Sequence[ClockEvent]) -> AttendanceState:
    """State after the last of ``events`` (one staff member, one work day)."""

    if not events:
        return AttendanceState.CLOCKED_OUT
    last = max(events, key=lambda e: (e.timestamp, e.event_id))
    return STATE_AFTER_EVENT[last.type]


class AttendanceStateMachine:
    """Validate an event against the current state and compute the new DayRecord.

    Pure: nothing is persisted here. A rejected transition raises
    ``InvalidTransitionError`` before any record is built.
    """

    def __init__(self, factory: Optional[TransitionStrategyFactory] = None):
        self._factory = factory or TransitionStrategyFactory()

    def can_accept(self, state: AttendanceState, event_type: ClockEventType) -> bool:
        return self._factory.for_event(event_type).accepts(state)

    def next_state(self, state: AttendanceState, event_type: ClockEventType) -> AttendanceState:
        strategy = self._factory.for_event(event_type)
        strategy.check(state)
        return strategy.target_state

    def transition(
        self,
        *,
        state: AttendanceState,
        record: Optional[DayRecord],
        event_type: ClockEventType,
        staff_id: int,
        store_id: int,
        work_date: date,
        at: datetime,
    ) -> DayRecord:
        strategy = self._factory.for_event(event_type)
        strategy.check(state)
        return strategy.apply(record=record, staff_id=staff_id, store_id=store_id, work_date=work_date, at=at)
