from __future__ import annotations

import logging

import jpholiday

from .mysql_holiday_calendar import MySQLHolidayCalendar

logger = logging.getLogger("timecard.holidays")


def sync_year(calendar: MySQLHolidayCalendar, year: int) -> int:
    """Copy one year of national holidays into the ``holidays_jp`` table.

    Returns the number of holidays written. Safe to re-run.
    """

    holidays = jpholiday.year_holidays(year)
    for day, name in holidays:
        calendar.upsert(day=day, name=name)
    logger.info("synced %s holidays for %s", len(holidays), year)
    return len(holidays)
