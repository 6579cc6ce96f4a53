from __future__ import annotations

from dataclasses import dataclass, field

from ..aggregation.aggregator import IntervalAggregator
from ..core.enums import ClockEventType
from .transitions.base import TransitionStrategy
from .transitions.break_end import BreakEndTransition
from .transitions.break_start import BreakStartTransition
from .transitions.clock_in import ClockInTransition
from .transitions.clock_out import ClockOutTransition


@dataclass
class TransitionStrategyFactory:
    """Factory Pattern: choose the transition strategy for an event type."""

    aggregator: IntervalAggregator = field(default_factory=IntervalAggregator)

    def __post_init__(self):
        self._strategies: dict[ClockEventType, TransitionStrategy] = {
            ClockEventType.IN: ClockInTransition(),
            ClockEventType.OUT: ClockOutTransition(self.aggregator),
            ClockEventType.BREAK_START: BreakStartTransition(),
            ClockEventType.BREAK_END: BreakEndTransition(),
        }

    def for_event(self, event_type: ClockEventType) -> TransitionStrategy:
        return self._strategies[ClockEventType(event_type)]
