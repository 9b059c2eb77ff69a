"""
Pytest fixtures for Pathway tests.
"""

from datetime import datetime, timedelta, timezone

import pytest

from pathway.demo.scenarios import build_initial_record, default_record, get_scenario
from pathway.engines.progression.engine import ProgressionEngine
from pathway.kernel.models.learner import LearnerRecord


class StepClock:
    """Deterministic clock: every call is one second after the previous one."""

    def __init__(self, start: datetime = datetime(2026, 1, 5, 9, 0, tzinfo=timezone.utc)):
        self.now = start

    def __call__(self) -> datetime:
        self.now += timedelta(seconds=1)
        return self.now


@pytest.fixture
def clock() -> StepClock:
    return StepClock()


@pytest.fixture
def record() -> LearnerRecord:
    """Fresh-start learner: apprentice, 0 XP, one unread welcome notification."""
    return default_record()


@pytest.fixture
def discovery_record() -> LearnerRecord:
    return build_initial_record(get_scenario("discovery-underway"))


@pytest.fixture
def engine(record: LearnerRecord, clock: StepClock) -> ProgressionEngine:
    """Demo engine: debug actions allowed."""
    return ProgressionEngine(
        record,
        notification_limit=50,
        allow_debug_actions=True,
        clock=clock,
    )


@pytest.fixture
def production_engine(record: LearnerRecord, clock: StepClock) -> ProgressionEngine:
    """Engine with debug actions disabled."""
    return ProgressionEngine(
        record,
        notification_limit=50,
        allow_debug_actions=False,
        clock=clock,
    )


@pytest.fixture
def make_engine():
    """Factory: engine over a LearnerRecord built from keyword fields (debug actions on)."""

    def _make(**record_fields) -> ProgressionEngine:
        return ProgressionEngine(
            LearnerRecord(**record_fields),
            notification_limit=50,
            allow_debug_actions=True,
            clock=StepClock(),
        )

    return _make
