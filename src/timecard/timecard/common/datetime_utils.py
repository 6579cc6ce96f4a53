from __future__ import annotations

import calendar
from datetime import date, datetime, time, timedelta

from ..core.constants import JST


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_month(value: str) -> date:
    """Parse YYYY-MM string into the first day of that month."""
    return datetime.strptime(value, "%Y-%m").date()


def month_bounds(first_day: date) -> tuple[date, date]:
    last = calendar.monthrange(first_day.year, first_day.month)[1]
    return first_day.replace(day=1), first_day.replace(day=last)


def to_jst(value: datetime) -> datetime:
    """Return ``value`` as an aware JST datetime.

    Naive datetimes are taken to already be JST wall time.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=JST)
    return value.astimezone(JST)


def parse_iso_datetime(value: str) -> datetime:
    # fromisoformat only learned the "Z" suffix in Python 3.11.
    if value.endswith(("Z", "z")):
        value = value[:-1] + "+00:00"
    return to_jst(datetime.fromisoformat(value))


def combine_jst(day: date, at: time) -> datetime:
    return datetime.combine(day, at, tzinfo=JST)


def floor_minutes(delta: timedelta) -> int:
    """Whole minutes in ``delta``, rounded down."""
    return int(delta.total_seconds() // 60)


def now_jst() -> datetime:
    """Current JST time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(JST)
