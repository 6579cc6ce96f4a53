from __future__ import annotations

import random
from dataclasses import replace
from datetime import date, datetime, timedelta, timezone

import pytest

from src.timecard.timecard.aggregation.aggregator import IntervalAggregator, is_night_hour, night_minutes_between
from src.timecard.timecard.clock.model import BreakInterval, DayRecord
from src.timecard.timecard.core.constants import JST
from src.timecard.timecard.core.enums import DayRecordStatus
from src.timecard.timecard.core.exceptions import ClockSkewError


def jst(*args) -> datetime:
    return datetime(*args, tzinfo=JST)


def make_record(clock_in, clock_out=None, breaks=(), **kw) -> DayRecord:
    return DayRecord(
        staff_id=1,
        store_id=1,
        work_date=clock_in.date(),
        clock_in=clock_in,
        clock_out=clock_out,
        status=DayRecordStatus.FINISHED if clock_out else DayRecordStatus.WORKING,
        break_intervals=tuple(BreakInterval(s, e) for s, e in breaks),
        **kw,
    )


def brute_force_night(start: datetime, end: datetime) -> int:
    minutes = 0
    cursor = start
    while cursor + timedelta(minutes=1) <= end:
        if is_night_hour(cursor.hour):
            minutes += 1
        cursor += timedelta(minutes=1)
    return minutes


def test_day_shift_with_lunch_break():
    record = make_record(
        jst(2025, 1, 6, 9, 0),
        jst(2025, 1, 6, 18, 0),
        breaks=[(jst(2025, 1, 6, 12, 0), jst(2025, 1, 6, 13, 0))],
    )

    result = IntervalAggregator().aggregate(record)

    assert result.work_minutes == 480
    assert result.break_minutes == 60
    assert result.night_minutes == 0


def test_evening_shift_counts_night_after_22():
    record = make_record(jst(2025, 1, 6, 20, 0), jst(2025, 1, 6, 23, 30))

    result = IntervalAggregator().aggregate(record)

    assert result.work_minutes == 210
    assert result.night_minutes == 90


def test_shift_spanning_whole_night_window():
    assert night_minutes_between(jst(2025, 1, 6, 21, 0), jst(2025, 1, 7, 6, 0)) == 420


@pytest.mark.parametrize(
    "start,end,expected",
    [
        (jst(2025, 1, 6, 21, 45), jst(2025, 1, 6, 22, 15), 15),
        (jst(2025, 1, 7, 4, 50), jst(2025, 1, 7, 5, 10), 10),
        (jst(2025, 1, 6, 22, 0), jst(2025, 1, 6, 22, 0), 0),
        (jst(2025, 1, 6, 10, 0), jst(2025, 1, 6, 17, 0), 0),
        (jst(2025, 1, 6, 22, 10, 30), jst(2025, 1, 6, 22, 12), 1),
    ],
)
def test_partial_hours_at_window_edges(start, end, expected):
    assert night_minutes_between(start, end) == expected


def test_night_minutes_match_minute_by_minute_count():
    rng = random.Random(20250106)
    base = jst(2025, 1, 6, 0, 0)
    for _ in range(200):
        start = base + timedelta(minutes=rng.randrange(0, 48 * 60))
        end = start + timedelta(minutes=rng.randrange(0, 20 * 60))
        assert night_minutes_between(start, end) == brute_force_night(start, end)


def test_night_never_exceeds_elapsed_time():
    rng = random.Random(7)
    base = jst(2025, 3, 1, 0, 0)
    agg = IntervalAggregator()
    for _ in range(100):
        clock_in = base + timedelta(minutes=rng.randrange(0, 24 * 60))
        clock_out = clock_in + timedelta(minutes=rng.randrange(1, 16 * 60))
        result = agg.aggregate(make_record(clock_in, clock_out))
        assert 0 <= result.night_minutes <= result.work_minutes + result.break_minutes


def test_aggregation_is_deterministic():
    record = make_record(
        jst(2025, 1, 6, 18, 0),
        jst(2025, 1, 7, 1, 0),
        breaks=[(jst(2025, 1, 6, 22, 30), jst(2025, 1, 6, 23, 0))],
    )
    agg = IntervalAggregator()

    assert agg.aggregate(record) == agg.aggregate(record)


def test_open_break_is_measured_up_to_now():
    record = make_record(
        jst(2025, 1, 6, 9, 0),
        breaks=[(jst(2025, 1, 6, 12, 0), None)],
    )

    result = IntervalAggregator().aggregate(record, now=jst(2025, 1, 6, 12, 20))

    assert result.break_minutes == 20
    assert result.work_minutes == 180


def test_finished_record_ignores_now():
    record = make_record(jst(2025, 1, 6, 9, 0), jst(2025, 1, 6, 10, 0))

    result = IntervalAggregator().aggregate(record, now=jst(2025, 1, 6, 23, 0))

    assert result.work_minutes == 60


def test_previous_intervals_are_added():
    record = make_record(
        jst(2025, 1, 6, 13, 0),
        jst(2025, 1, 6, 14, 0),
        previous_work_minutes=180,
        previous_break_minutes=15,
        previous_night_minutes=0,
    )

    result = IntervalAggregator().aggregate(record)

    assert result.work_minutes == 240
    assert result.break_minutes == 15


def test_now_before_clock_in_is_clock_skew():
    record = make_record(jst(2025, 1, 6, 9, 0))

    with pytest.raises(ClockSkewError):
        IntervalAggregator().aggregate(record, now=jst(2025, 1, 6, 8, 0))


def test_utc_input_is_evaluated_in_jst():
    # 13:00-14:30 UTC is 22:00-23:30 JST
    start = datetime(2025, 1, 6, 13, 0, tzinfo=timezone.utc)
    end = datetime(2025, 1, 6, 14, 30, tzinfo=timezone.utc)

    assert night_minutes_between(start, end) == 90


def test_seconds_are_floored_once_per_span():
    record = make_record(jst(2025, 1, 6, 9, 0, 0), jst(2025, 1, 6, 9, 10, 59))

    assert IntervalAggregator().aggregate(record).work_minutes == 10


def test_work_date_field_does_not_affect_minutes():
    record = make_record(jst(2025, 1, 6, 23, 0), jst(2025, 1, 7, 1, 0))
    shifted = replace(record, work_date=date(2025, 1, 7))

    agg = IntervalAggregator()
    assert agg.aggregate(record) == agg.aggregate(shifted)
