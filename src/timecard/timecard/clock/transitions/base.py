from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import ClassVar, Mapping, Optional

from ...core.enums import AttendanceState, ClockEventType
from ...core.exceptions import InvalidTransitionError
from ..model import DayRecord

NOT_CLOCKED_IN = "not clocked in"
ALREADY_CLOCKED_IN = "already clocked in"
ALREADY_BREAKING = "already breaking"
NOT_ON_BREAK = "not on break"


class TransitionStrategy(ABC):
    """Strategy Pattern: how one event type moves a staff member's day forward."""

    event_type: ClassVar[ClockEventType]
    target_state: ClassVar[AttendanceState]
    # State -> rejection message for every state this event is not legal in.
    rejections: ClassVar[Mapping[AttendanceState, str]]

    def accepts(self, state: AttendanceState) -> bool:
        return state not in self.rejections

    def check(self, state: AttendanceState) -> None:
        message = self.rejections.get(state)
        if message is not None:
            raise InvalidTransitionError(message, state=state, event_type=self.event_type)

    def _require_record(self, record: Optional[DayRecord], state: AttendanceState) -> DayRecord:
        if record is None:
            raise InvalidTransitionError(NOT_CLOCKED_IN, state=state, event_type=self.event_type)
        return record

    @abstractmethod
    def apply(
        self,
        *,
        record: Optional[DayRecord],
        staff_id: int,
        store_id: int,
        work_date: date,
        at: datetime,
    ) -> DayRecord:
        raise NotImplementedError
