from __future__ import annotations

import argparse
import sys
from datetime import date
from pathlib import Path

import importlib

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.timecard.timecard.common.logging import configure_logging
from src.timecard.timecard.database.connection import DatabaseConnection, DBConfig
from src.timecard.timecard.holidays.mysql_holiday_calendar import MySQLHolidayCalendar
from src.timecard.timecard.holidays.sync import sync_year


def main() -> None:
    parser = argparse.ArgumentParser(description="Copy Japanese national holidays into holidays_jp")
    parser.add_argument("years", nargs="*", type=int, default=[date.today().year])
    args = parser.parse_args()

    settings = importlib.import_module(get_settings_module())
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    calendar = MySQLHolidayCalendar(DatabaseConnection(DBConfig.from_dict(settings.DB_CONFIG)))

    for year in args.years:
        count = sync_year(calendar, year)
        print(f"OK: {year} -> {count} holidays")


if __name__ == "__main__":
    main()
