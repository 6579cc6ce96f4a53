from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_jst, to_jst
from ..common.validators import require_event_type, require_positive_id
from ..core.enums import AttendanceState, ClockEventType
from ..core.exceptions import ClockSkewError, InvalidTransitionError
from ..workday.resolver import DayResolver
from .model import ClockEvent, CurrentState, DayRecord
from .repository import AttendanceRepository
from .state_machine import AttendanceStateMachine, derive_state

logger = logging.getLogger("timecard.clock")


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        *,
        resolver: DayResolver | None = None,
        state_machine: AttendanceStateMachine | None = None,
    ):
        self._attendance = attendance
        self._resolver = resolver or DayResolver()
        self._state_machine = state_machine or AttendanceStateMachine()

    def record_event(
        self,
        staff_id: int,
        store_id: int,
        event_type: ClockEventType | str,
        timestamp: datetime | None = None,
    ) -> DayRecord:
        """Validate and append one clock event, returning the updated DayRecord.

        The read-modify-write runs under the staff member's lock, so two
        near-simultaneous events for the same person are applied one after
        the other against fresh state.
        """

        staff_id = require_positive_id(staff_id, "staff_id")
        store_id = require_positive_id(store_id, "store_id")
        event_type = require_event_type(event_type)
        at = to_jst(timestamp) if timestamp is not None else now_jst()

        with self._attendance.staff_lock(staff_id):
            latest = self._attendance.latest_event_for_staff(staff_id)
            if latest is not None and at < latest.timestamp:
                logger.warning(
                    "clock skew: staff=%s %s at %s precedes last event %s at %s",
                    staff_id, event_type.value, at.isoformat(), latest.type.value, latest.timestamp.isoformat(),
                )
                raise ClockSkewError("event time precedes the last recorded event")

            work_date = self._resolver.resolve_work_day(at)
            state = derive_state(self._attendance.list_events(staff_id, work_date))
            record = self._attendance.get_day_record(staff_id, work_date)

            try:
                updated = self._state_machine.transition(
                    state=state,
                    record=record,
                    event_type=event_type,
                    staff_id=staff_id,
                    store_id=store_id,
                    work_date=work_date,
                    at=at,
                )
            except InvalidTransitionError as e:
                logger.info("rejected %s for staff=%s in %s: %s", event_type.value, staff_id, state.value, e)
                raise

            self._attendance.commit_event(
                staff_id=staff_id,
                store_id=store_id,
                event_type=event_type,
                timestamp=at,
                record=updated,
            )

        logger.info("staff=%s %s at %s (work_date=%s)", staff_id, event_type.value, at.isoformat(), work_date)
        return updated

    def get_current_state(self, staff_id: int, *, now: datetime | None = None) -> CurrentState:
        staff_id = require_positive_id(staff_id, "staff_id")
        now = to_jst(now) if now is not None else now_jst()
        work_date = self._resolver.resolve_work_day(now)

        state = derive_state(self._attendance.list_events(staff_id, work_date))
        record = self._attendance.get_day_record(staff_id, work_date)

        last_break_start = None
        if state == AttendanceState.BREAKING and record and record.open_break:
            last_break_start = record.open_break.start

        return CurrentState(
            staff_id=staff_id,
            work_date=work_date,
            state=state,
            last_clock_in=record.clock_in if record else None,
            last_break_start=last_break_start,
        )

    def get_day_record(self, staff_id: int, work_date: date) -> Optional[DayRecord]:
        return self._attendance.get_day_record(require_positive_id(staff_id, "staff_id"), work_date)

    def list_events(self, staff_id: int, work_date: date) -> Sequence[ClockEvent]:
        return self._attendance.list_events(require_positive_id(staff_id, "staff_id"), work_date)
