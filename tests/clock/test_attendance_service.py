from __future__ import annotations

import threading
from datetime import date, datetime, timezone

import pytest

from src.timecard.timecard.clock.memory_repository import InMemoryAttendanceRepository
from src.timecard.timecard.clock.service import AttendanceService
from src.timecard.timecard.core.constants import JST
from src.timecard.timecard.core.enums import AttendanceState, DayBoundary, DayRecordStatus
from src.timecard.timecard.core.exceptions import ClockSkewError, InvalidTransitionError, ValidationError
from src.timecard.timecard.workday.resolver import DayResolver

DAY = date(2025, 1, 6)


def jst(*args) -> datetime:
    return datetime(*args, tzinfo=JST)


def test_first_clock_in_creates_the_day_record(attendance_service):
    record = attendance_service.record_event(1, 3, "in", jst(2025, 1, 6, 9, 0))

    assert record.work_date == DAY
    assert record.store_id == 3
    assert record.status == DayRecordStatus.WORKING
    assert record.clock_in == jst(2025, 1, 6, 9, 0)
    assert record.first_clock_in == jst(2025, 1, 6, 9, 0)
    assert record.clock_out is None


def test_full_day_with_lunch_break(attendance_service):
    attendance_service.record_event(1, 1, "in", jst(2025, 1, 6, 9, 0))
    attendance_service.record_event(1, 1, "break_start", jst(2025, 1, 6, 12, 0))
    attendance_service.record_event(1, 1, "break_end", jst(2025, 1, 6, 13, 0))
    record = attendance_service.record_event(1, 1, "out", jst(2025, 1, 6, 18, 0))

    assert record.status == DayRecordStatus.FINISHED
    assert record.work_minutes == 480
    assert record.break_minutes == 60
    assert record.night_minutes == 0
    assert record.total_work_minutes == 480


def test_clock_out_while_breaking_closes_the_break(attendance_service):
    attendance_service.record_event(1, 1, "in", jst(2025, 1, 6, 9, 0))
    attendance_service.record_event(1, 1, "break_start", jst(2025, 1, 6, 12, 0))
    record = attendance_service.record_event(1, 1, "out", jst(2025, 1, 6, 13, 0))

    assert record.break_intervals[-1].end == jst(2025, 1, 6, 13, 0)
    assert record.open_break is None
    assert record.break_minutes == 60
    assert record.work_minutes == 180


def test_clock_in_after_finished_shift_reopens_same_record(attendance_service, attendance_repo):
    attendance_service.record_event(1, 1, "in", jst(2025, 1, 6, 9, 0))
    attendance_service.record_event(1, 1, "out", jst(2025, 1, 6, 12, 0))
    reopened = attendance_service.record_event(1, 1, "in", jst(2025, 1, 6, 13, 0))

    assert reopened.status == DayRecordStatus.WORKING
    assert reopened.clock_out is None
    assert reopened.previous_work_minutes == 180
    assert reopened.work_minutes == 0
    assert reopened.first_clock_in == jst(2025, 1, 6, 9, 0)
    assert attendance_service.get_current_state(1, now=jst(2025, 1, 6, 13, 5)).state == AttendanceState.CLOCKED_IN

    attendance_service.record_event(1, 1, "break_start", jst(2025, 1, 6, 15, 0))
    attendance_service.record_event(1, 1, "break_end", jst(2025, 1, 6, 15, 30))
    final = attendance_service.record_event(1, 1, "out", jst(2025, 1, 6, 18, 0))

    # 180 + (300 - 30)
    assert final.previous_work_minutes == 180
    assert final.work_minutes == 270
    assert final.total_work_minutes == 450
    assert final.previous_break_minutes == 0
    assert final.break_minutes == 30
    assert len(attendance_repo.list_day_records(start_date=DAY, end_date=DAY, staff_id=1)) == 1


def test_second_clock_in_is_rejected(attendance_service):
    attendance_service.record_event(1, 1, "in", jst(2025, 1, 6, 9, 0))

    with pytest.raises(InvalidTransitionError, match="already clocked in"):
        attendance_service.record_event(1, 1, "in", jst(2025, 1, 6, 9, 1))


def test_second_break_start_is_rejected(attendance_service):
    attendance_service.record_event(1, 1, "in", jst(2025, 1, 6, 9, 0))
    attendance_service.record_event(1, 1, "break_start", jst(2025, 1, 6, 12, 0))

    with pytest.raises(InvalidTransitionError, match="already breaking"):
        attendance_service.record_event(1, 1, "break_start", jst(2025, 1, 6, 12, 5))


def test_event_before_last_event_is_rejected_as_clock_skew(attendance_service, attendance_repo):
    attendance_service.record_event(1, 1, "in", jst(2025, 1, 6, 10, 0))
    before = attendance_repo.get_day_record(1, DAY)

    with pytest.raises(ClockSkewError):
        attendance_service.record_event(1, 1, "out", jst(2025, 1, 6, 9, 0))

    assert attendance_repo.get_day_record(1, DAY) == before
    assert len(attendance_repo.list_events(1, DAY)) == 1


def test_skew_is_checked_across_work_days(attendance_service):
    attendance_service.record_event(1, 1, "in", jst(2025, 1, 6, 9, 0))

    with pytest.raises(ClockSkewError):
        attendance_service.record_event(1, 1, "in", jst(2025, 1, 5, 9, 0))


def test_unknown_event_type_is_rejected_at_the_boundary(attendance_service, attendance_repo):
    with pytest.raises(ValidationError, match="unknown clock event type"):
        attendance_service.record_event(1, 1, "lunch", jst(2025, 1, 6, 9, 0))

    assert attendance_repo.latest_event_for_staff(1) is None


@pytest.mark.parametrize("staff_id,store_id", [(0, 1), (1, 0), ("abc", 1), (None, 1)])
def test_invalid_ids_are_rejected(attendance_service, staff_id, store_id):
    with pytest.raises(ValidationError):
        attendance_service.record_event(staff_id, store_id, "in", jst(2025, 1, 6, 9, 0))


def test_missing_timestamp_uses_current_jst_time(attendance_service, monkeypatch, fixed_now):
    monkeypatch.setattr("src.timecard.timecard.clock.service.now_jst", lambda: fixed_now)

    record = attendance_service.record_event(1, 1, "in")

    assert record.clock_in == fixed_now


def test_utc_timestamps_are_stored_as_jst(attendance_service):
    record = attendance_service.record_event(1, 1, "in", datetime(2025, 1, 6, 0, 0, tzinfo=timezone.utc))

    assert record.clock_in == jst(2025, 1, 6, 9, 0)
    assert record.clock_in.utcoffset().total_seconds() == 9 * 3600


def test_current_state_reports_open_break(attendance_service):
    attendance_service.record_event(1, 1, "in", jst(2025, 1, 6, 9, 0))
    attendance_service.record_event(1, 1, "break_start", jst(2025, 1, 6, 12, 0))

    current = attendance_service.get_current_state(1, now=jst(2025, 1, 6, 12, 10))

    assert current.state == AttendanceState.BREAKING
    assert current.work_date == DAY
    assert current.last_clock_in == jst(2025, 1, 6, 9, 0)
    assert current.last_break_start == jst(2025, 1, 6, 12, 0)


def test_current_state_of_a_new_day_is_clocked_out(attendance_service):
    attendance_service.record_event(1, 1, "in", jst(2025, 1, 6, 9, 0))

    current = attendance_service.get_current_state(1, now=jst(2025, 1, 7, 9, 0))

    assert current.state == AttendanceState.CLOCKED_OUT
    assert current.last_clock_in is None


def test_overnight_shift_stays_on_start_day_with_cutoff_policy():
    svc = AttendanceService(
        InMemoryAttendanceRepository(),
        resolver=DayResolver(DayBoundary.EARLY_MORNING_CUTOFF),
    )

    svc.record_event(1, 1, "in", jst(2025, 1, 6, 22, 0))
    record = svc.record_event(1, 1, "out", jst(2025, 1, 7, 2, 0))

    assert record.work_date == DAY
    assert record.work_minutes == 240
    assert record.night_minutes == 240


def test_overnight_clock_out_lands_on_next_day_with_midnight_policy(attendance_service):
    attendance_service.record_event(1, 1, "in", jst(2025, 1, 6, 22, 0))

    with pytest.raises(InvalidTransitionError, match="not clocked in"):
        attendance_service.record_event(1, 1, "out", jst(2025, 1, 7, 2, 0))


class SlowRepository(InMemoryAttendanceRepository):
    """Widens the read/write window so unsynchronized writers would collide."""

    def __init__(self, gate: threading.Barrier):
        super().__init__()
        self._gate = gate

    def get_day_record(self, staff_id, work_date):
        record = super().get_day_record(staff_id, work_date)
        try:
            self._gate.wait(timeout=0.2)
        except threading.BrokenBarrierError:
            pass
        return record


def test_concurrent_clock_ins_for_one_staff_accept_exactly_one():
    repo = SlowRepository(threading.Barrier(2))
    svc = AttendanceService(repo)
    results: list[str] = []
    lock = threading.Lock()

    def clock_in():
        try:
            svc.record_event(1, 1, "in", jst(2025, 1, 6, 9, 0))
            outcome = "ok"
        except InvalidTransitionError:
            outcome = "rejected"
        with lock:
            results.append(outcome)

    threads = [threading.Thread(target=clock_in) for _ in range(2)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert sorted(results) == ["ok", "rejected"]
    assert len(repo.list_events(1, DAY)) == 1


def test_different_staff_are_independent(attendance_service):
    a = attendance_service.record_event(1, 1, "in", jst(2025, 1, 6, 9, 0))
    b = attendance_service.record_event(2, 1, "in", jst(2025, 1, 6, 9, 0))

    assert a.staff_id == 1
    assert b.staff_id == 2
    assert attendance_service.get_current_state(2, now=jst(2025, 1, 6, 10, 0)).state == AttendanceState.CLOCKED_IN


def test_two_services_sharing_storage_accept_exactly_one_clock_in():
    repo = SlowRepository(threading.Barrier(2))
    workers = [AttendanceService(repo), AttendanceService(repo)]
    results: list[str] = []
    lock = threading.Lock()

    def clock_in(svc):
        try:
            svc.record_event(1, 1, "in", jst(2025, 1, 6, 9, 0))
            outcome = "ok"
        except InvalidTransitionError:
            outcome = "rejected"
        with lock:
            results.append(outcome)

    threads = [threading.Thread(target=clock_in, args=(svc,)) for svc in workers]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert sorted(results) == ["ok", "rejected"]
    assert len(repo.list_events(1, DAY)) == 1
    assert repo.get_day_record(1, DAY).status == DayRecordStatus.WORKING


@pytest.mark.parametrize("staff_id", [1.9, True, "1.0", "", "-3"])
def test_non_integral_ids_are_not_coerced(attendance_service, attendance_repo, staff_id):
    with pytest.raises(ValidationError, match="staff_id is invalid"):
        attendance_service.record_event(staff_id, 1, "in", jst(2025, 1, 6, 9, 0))

    assert attendance_repo.latest_event_for_staff(1) is None


def test_digit_string_ids_are_accepted(attendance_service):
    record = attendance_service.record_event(" 12 ", "3", "in", jst(2025, 1, 6, 9, 0))

    assert (record.staff_id, record.store_id) == (12, 3)
