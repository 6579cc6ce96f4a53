from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

from ..common.datetime_utils import combine_jst, to_jst
from ..core.constants import EARLY_MORNING_CUTOFF_HOUR
from ..core.enums import DayBoundary


@dataclass(frozen=True)
class DayResolver:
    """Map instants to the logical work day they belong to.

    Exactly one boundary policy is active per deployment:

    - ``JST_MIDNIGHT``: the work day is the JST calendar date.
    - ``EARLY_MORNING_CUTOFF``: JST wall times before ``cutoff_hour`` belong
      to the previous calendar date, so a shift crossing midnight stays on
      the day it started.
    """

    boundary: DayBoundary = DayBoundary.JST_MIDNIGHT
    cutoff_hour: int = EARLY_MORNING_CUTOFF_HOUR

    def __post_init__(self):
        if not 0 <= self.cutoff_hour < 24:
            raise ValueError(f"cutoff_hour out of range: {self.cutoff_hour}")

    @property
    def day_start(self) -> time:
        if self.boundary == DayBoundary.EARLY_MORNING_CUTOFF:
            return time(self.cutoff_hour, 0)
        return time(0, 0)

    def resolve_work_day(self, timestamp: datetime) -> date:
        local = to_jst(timestamp)
        if self.boundary == DayBoundary.EARLY_MORNING_CUTOFF:
            local = local - timedelta(hours=self.cutoff_hour)
        return local.date()

    def work_day_bounds(self, work_day: date) -> tuple[datetime, datetime]:
        """JST instants ``[start, end)`` delimiting ``work_day``."""
        start = combine_jst(work_day, self.day_start)
        return start, start + timedelta(days=1)
