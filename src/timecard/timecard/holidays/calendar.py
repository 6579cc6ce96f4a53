from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, Protocol

import jpholiday

logger = logging.getLogger("timecard.holidays")


class HolidayCalendar(Protocol):
    def is_holiday(self, day: date) -> bool:
        raise NotImplementedError


class JapaneseHolidayCalendar:
    """National holidays of Japan via ``jpholiday``."""

    def __init__(self):
        self._cache: dict[date, bool] = {}

    def is_holiday(self, day: date) -> bool:
        if day not in self._cache:
            self._cache[day] = bool(jpholiday.is_holiday(day))
        return self._cache[day]

    def holiday_name(self, day: date) -> str | None:
        return jpholiday.is_holiday_name(day)


@dataclass(frozen=True)
class StaticHolidayCalendar:
    """Fixed set of dates, e.g. store-specific closing days."""

    dates: frozenset[date] = field(default_factory=frozenset)

    @classmethod
    def of(cls, days: Iterable[date]) -> "StaticHolidayCalendar":
        return cls(frozenset(days))

    def is_holiday(self, day: date) -> bool:
        return day in self.dates


class FailOpenHolidayCalendar:
    """Treat a failing lookup as "not a holiday".

    Holiday pay is an additive bonus, so a lookup outage underpays the bonus
    instead of blocking the whole payroll run. The failure is logged.
    """

    def __init__(self, inner: HolidayCalendar):
        self._inner = inner

    def is_holiday(self, day: date) -> bool:
        try:
            return bool(self._inner.is_holiday(day))
        except Exception:
            logger.warning("holiday lookup failed for %s; treating as a regular day", day, exc_info=True)
            return False
