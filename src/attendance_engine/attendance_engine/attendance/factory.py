from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple, Type

from .strategies.base import ClockInStrategy
from .strategies.convert_absent_strategy import ConvertAbsentStrategy
from .strategies.create_strategy import CreateRecordStrategy, NewSessionStrategy
from .strategies.keep_existing_strategy import KeepExistingStrategy
from .strategies.reject_strategy import RejectAmbiguousStrategy, RejectOpenSessionStrategy
from .transitions import ClockEvent, SessionState

TRANSITIONS: Dict[Tuple[SessionState, ClockEvent], Type[ClockInStrategy]] = {
    (SessionState.NO_RECORD, ClockEvent.CLOCK_IN): CreateRecordStrategy,
    (SessionState.NO_RECORD, ClockEvent.MARK_ABSENT): CreateRecordStrategy,
    (SessionState.ABSENT_RECORD, ClockEvent.CLOCK_IN): ConvertAbsentStrategy,
    (SessionState.ABSENT_RECORD, ClockEvent.MARK_ABSENT): KeepExistingStrategy,
    (SessionState.CLOSED_SESSION, ClockEvent.CLOCK_IN): NewSessionStrategy,
    (SessionState.CLOSED_SESSION, ClockEvent.MARK_ABSENT): NewSessionStrategy,
    (SessionState.OPEN_SESSION, ClockEvent.CLOCK_IN): RejectOpenSessionStrategy,
    (SessionState.OPEN_SESSION, ClockEvent.MARK_ABSENT): RejectOpenSessionStrategy,
    (SessionState.UNRECOGNIZED, ClockEvent.CLOCK_IN): RejectAmbiguousStrategy,
    (SessionState.UNRECOGNIZED, ClockEvent.MARK_ABSENT): RejectAmbiguousStrategy,
}


def _check_exhaustive(table) -> None:
    missing = [(s, e) for s in SessionState for e in ClockEvent if (s, e) not in table]
    if missing:
        raise RuntimeError(f"Clock-in transition table is missing {missing}")


_check_exhaustive(TRANSITIONS)


@dataclass
class ClockInStrategyFactory:
    """Factory Pattern: pick the strategy for the current state and incoming event."""

    def for_transition(self, state: SessionState, event: ClockEvent) -> ClockInStrategy:
        return TRANSITIONS[(state, event)]()
