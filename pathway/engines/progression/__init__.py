"""
Progression - XP thresholds, the engine that owns the learner record, and
read-only selectors over it.
"""

from pathway.engines.progression.engine import ProgressionEngine
from pathway.engines.progression.selectors import (
    center_capacity,
    graduation_checklist,
    recommended_next_step,
)
from pathway.engines.progression.stages import DEFAULT_STAGES, StageRegistry
from pathway.engines.progression.thresholds import LEVEL_THRESHOLDS, level_for_xp

__all__ = [
    "ProgressionEngine",
    "StageRegistry",
    "DEFAULT_STAGES",
    "LEVEL_THRESHOLDS",
    "level_for_xp",
    "recommended_next_step",
    "graduation_checklist",
    "center_capacity",
]
