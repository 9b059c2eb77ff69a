"""
Level gates - requirements checked before a learner may advance.

Gates (default table):
- Apprentice: 800 XP, 10 tasks, 5 units, 1 mentor meeting
- Journeyman: 2000 XP, 25 tasks, 8 units, 1 project presentation
- Master: 4000 XP, 40 tasks, 10 units, capstone, Demo Day presentation
"""

from pathway.engines.gates.gate_evaluator import (
    DEFAULT_GATE_REQUIREMENTS,
    GateEvaluation,
    Requirement,
    RequirementKind,
    RequirementStatus,
    evaluate_gate,
    next_level,
)

__all__ = [
    "DEFAULT_GATE_REQUIREMENTS",
    "GateEvaluation",
    "Requirement",
    "RequirementKind",
    "RequirementStatus",
    "evaluate_gate",
    "next_level",
]
