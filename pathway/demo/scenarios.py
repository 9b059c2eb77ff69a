"""
Demo scenarios - declared partial initial states for a learner record.

An engine is built from exactly one scenario: its partial state is merged
over the hard-coded defaults below.
"""

from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel

from pathway.kernel.models.learner import (
    CenterCheckIn,
    LearnerRecord,
    Notification,
    NotificationKind,
    OnboardingProfile,
)


class Scenario(BaseModel):
    """A named starting point for a demo or test session."""

    id: str
    name: str
    description: str = ""
    initial_state: Dict[str, Any] = {}


def default_record(seed: Optional[str] = None) -> LearnerRecord:
    """The hard-coded baseline every scenario is merged over."""
    record = LearnerRecord(
        learner_id="learner-demo-2026",
        name="Ayse Yilmaz",
        onboarding=OnboardingProfile(city="eskisehir", center_id="center-eskisehir"),
        center=CenterCheckIn(capacity=30, occupancy=12),
        notifications=[
            Notification(
                id="welcome",
                title="Welcome aboard",
                message="Take the first step toward shaping your future.",
                kind=NotificationKind.INFO,
            )
        ],
    )
    if seed is not None:
        record.seed = seed
    return record


def merge_state(base: Mapping[str, Any], overrides: Mapping[str, Any]) -> Dict[str, Any]:
    """Recursively merge overrides into base; nested mappings merge, everything else replaces."""
    merged = dict(base)
    for key, value in overrides.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = merge_state(current, value)
        else:
            merged[key] = value
    return merged


def build_initial_record(
    scenario: Optional[Scenario] = None,
    seed: Optional[str] = None,
) -> LearnerRecord:
    """
    Build a learner record from a scenario.

    Raises:
        pydantic.ValidationError: the scenario declares an invalid field value
    """
    base = default_record(seed)
    if scenario is None or not scenario.initial_state:
        return base
    merged = merge_state(base.model_dump(), scenario.initial_state)
    return LearnerRecord.model_validate(merged)


DEFAULT_SCENARIOS: List[Scenario] = [
    Scenario(
        id="fresh-start",
        name="Fresh start",
        description="A learner who has just signed up.",
    ),
    Scenario(
        id="discovery-underway",
        name="Discovery underway",
        description="Onboarded learner a few units into the discovery phase.",
        initial_state={
            "phase": "discovery",
            "xp": 320,
            "streak": 3,
            "completed_units": ["ML-01"],
            "completed_tasks": ["T-01"],
            "onboarding": {"primary_path": "data-analysis", "completed": True},
        },
    ),
    Scenario(
        id="near-graduation",
        name="Near graduation",
        description="Master-level learner a few hundred XP short of graduating.",
        initial_state={
            "phase": "impact",
            "level": "master",
            "xp": 4800,
            "streak": 45,
            "gdr_score": 92,
        },
    ),
]


def get_scenario(scenario_id: str) -> Optional[Scenario]:
    for scenario in DEFAULT_SCENARIOS:
        if scenario.id == scenario_id:
            return scenario
    return None
