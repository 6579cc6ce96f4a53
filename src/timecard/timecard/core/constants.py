"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time, timedelta, timezone
from decimal import Decimal

JST = timezone(timedelta(hours=9), name="JST")

EARLY_MORNING_CUTOFF_HOUR = 4

NIGHT_START_HOUR = 22
NIGHT_END_HOUR = 5

NIGHT_DIFFERENTIAL_RATE = Decimal("0.25")
DEFAULT_OVERTIME_RATE = Decimal("1.25")

DEFAULT_SCHEDULED_START = time(9, 0)
DEFAULT_SCHEDULED_END = time(18, 0)
