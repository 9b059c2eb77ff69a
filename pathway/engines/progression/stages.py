"""
Stage registry - named learner snapshots for the demo "jump to stage" action.

The registry is handed to the engine at construction time; the engine never
looks stages up anywhere else.
"""

from typing import Any, Dict, List, Mapping, Optional

from pydantic import ValidationError

from pathway.demo.scenarios import merge_state
from pathway.kernel.models.learner import LearnerRecord


def _gdr(technical_role, teamwork, presentation, reliability, social_impact) -> Dict[str, float]:
    return {
        "technical_role": technical_role,
        "teamwork": teamwork,
        "presentation": presentation,
        "reliability": reliability,
        "social_impact": social_impact,
    }


DEFAULT_STAGES: Dict[str, Dict[str, Any]] = {
    "onboarding": {
        "phase": "onboarding",
        "level": "apprentice",
        "xp": 0,
        "streak": 0,
        "gdr_score": 0,
        "gdr_components": _gdr(0, 0, 0, 0, 0),
        "collected_badges": [],
        "onboarding": {"primary_path": None, "completed": False},
    },
    "dashboard-beginner": {
        "phase": "discovery",
        "level": "apprentice",
        "xp": 150,
        "streak": 3,
        "gdr_score": 20,
        "gdr_components": _gdr(30, 10, 10, 40, 10),
        "collected_badges": ["First Step"],
        "onboarding": {"primary_path": "data-analysis", "completed": True},
    },
    "learning-module": {
        "phase": "discovery",
        "level": "apprentice",
        "xp": 450,
        "streak": 5,
        "gdr_score": 35,
        "gdr_components": _gdr(50, 20, 20, 45, 40),
        "collected_badges": ["Curious Explorer", "Code Literate"],
    },
    "bot-arena": {
        "phase": "build",
        "level": "journeyman",
        "xp": 1200,
        "streak": 12,
        "gdr_score": 55,
        "gdr_components": _gdr(65, 40, 30, 70, 70),
        "collected_badges": ["Problem Solver", "Algorithm Master"],
        "simulation": {"active_scenario_id": "traffic-ai", "status": "running", "score": 0},
    },
    "project-submission": {
        "phase": "build",
        "level": "journeyman",
        "xp": 2100,
        "streak": 24,
        "gdr_score": 78,
        "gdr_components": _gdr(80, 75, 60, 85, 90),
        "collected_badges": ["Project Lead", "Team Player", "Hackathon Finalist"],
    },
    "dashboard-advanced": {
        "phase": "impact",
        "level": "master",
        "xp": 4800,
        "streak": 45,
        "gdr_score": 92,
        "gdr_components": _gdr(95, 90, 85, 95, 95),
        "collected_badges": ["Senior Developer", "Community Mentor", "Open Source Contributor"],
    },
    "graduation": {
        "phase": "graduation",
        "level": "graduate",
        "xp": 5500,
        "streak": 60,
        "gdr_score": 98,
        "gdr_components": _gdr(98, 98, 95, 100, 99),
        "collected_badges": ["Graduate 2026", "Job Ready", "Full Stack Developer"],
        "portfolio": {"certificate_id": "CERT-DEMO-2026"},
    },
}


class StageRegistry:
    """
    Read-only table of stage key -> partial learner state.

    Every entry is validated against a default record up front, so applying
    a known stage cannot fail later.
    """

    def __init__(self, stages: Optional[Mapping[str, Mapping[str, Any]]] = None):
        source = DEFAULT_STAGES if stages is None else stages
        self._stages: Dict[str, Dict[str, Any]] = {}
        baseline = LearnerRecord().model_dump()
        for key, overrides in source.items():
            try:
                LearnerRecord.model_validate(merge_state(baseline, overrides))
            except ValidationError as exc:
                raise ValueError(f"Invalid stage '{key}': {exc}") from exc
            self._stages[key] = dict(overrides)

    def __contains__(self, key: object) -> bool:
        return key in self._stages

    def keys(self) -> List[str]:
        return list(self._stages)

    def get(self, key: str) -> Optional[Dict[str, Any]]:
        overrides = self._stages.get(key)
        return dict(overrides) if overrides is not None else None

    def apply(self, record: LearnerRecord, key: str) -> Optional[LearnerRecord]:
        """Return a new record with the stage's fields written over ``record``, or None for an unknown key."""
        overrides = self._stages.get(key)
        if overrides is None:
            return None
        return LearnerRecord.model_validate(merge_state(record.model_dump(), overrides))
