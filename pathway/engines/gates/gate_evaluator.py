"""
Gate Evaluator - requirements a learner must fulfil to leave a level.

Mirrors the effort-gate pattern: every requirement is checked against the
live record, reported with its current value, and the gate passes only when
all of them do.
"""

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel

from pathway.kernel.models.learner import LEVEL_ORDER, LearnerRecord, Level


class RequirementKind(str, Enum):
    """What a requirement counts."""
    XP = "xp"
    TASK_COUNT = "task-count"
    UNIT_COUNT = "unit-count"
    MEETING = "meeting"


class Requirement(BaseModel):
    """A static requirement definition."""

    id: str
    label: str
    kind: RequirementKind
    target: float
    icon: str = ""


class RequirementStatus(Requirement):
    """A requirement annotated against a learner record."""

    current: float
    fulfilled: bool


class GateEvaluation(BaseModel):
    """Result of evaluating one level's gate."""

    level: Level
    next_level: Optional[Level]
    requirements: List[RequirementStatus]
    all_fulfilled: bool
    can_advance: bool

    @property
    def missing(self) -> List[RequirementStatus]:
        return [r for r in self.requirements if not r.fulfilled]


DEFAULT_GATE_REQUIREMENTS: Dict[Level, List[Requirement]] = {
    Level.APPRENTICE: [
        Requirement(id="xp", label="Earn 800 XP", kind=RequirementKind.XP, target=800, icon="star"),
        Requirement(id="tasks", label="Complete 10 tasks", kind=RequirementKind.TASK_COUNT, target=10, icon="task_alt"),
        Requirement(id="units", label="Finish 5 units", kind=RequirementKind.UNIT_COUNT, target=5, icon="science"),
        Requirement(id="meeting", label="Attend a mentor meeting", kind=RequirementKind.MEETING, target=1, icon="groups"),
    ],
    Level.JOURNEYMAN: [
        Requirement(id="xp", label="Earn 2000 XP", kind=RequirementKind.XP, target=2000, icon="star"),
        Requirement(id="tasks", label="Complete 25 tasks", kind=RequirementKind.TASK_COUNT, target=25, icon="task_alt"),
        Requirement(id="units", label="Finish 8 units", kind=RequirementKind.UNIT_COUNT, target=8, icon="science"),
        Requirement(id="project", label="Present a mini project", kind=RequirementKind.MEETING, target=1, icon="rocket_launch"),
    ],
    Level.MASTER: [
        Requirement(id="xp", label="Earn 4000 XP", kind=RequirementKind.XP, target=4000, icon="star"),
        Requirement(id="tasks", label="Complete 40 tasks", kind=RequirementKind.TASK_COUNT, target=40, icon="task_alt"),
        Requirement(id="units", label="Finish 10 units", kind=RequirementKind.UNIT_COUNT, target=10, icon="science"),
        Requirement(id="capstone", label="Complete the capstone project", kind=RequirementKind.TASK_COUNT, target=1, icon="workspace_premium"),
        Requirement(id="demo", label="Present at Demo Day", kind=RequirementKind.MEETING, target=1, icon="present_to_all"),
    ],
    Level.GRADUATE: [],
}


def next_level(level: Level) -> Optional[Level]:
    """The level after ``level``, or None for the last one."""
    index = LEVEL_ORDER.index(level)
    if index + 1 >= len(LEVEL_ORDER):
        return None
    return LEVEL_ORDER[index + 1]


def current_value(
    record: LearnerRecord,
    kind: RequirementKind,
    meetings_attended: int = 0,
) -> float:
    """Read the value a requirement kind is measured against."""
    if kind == RequirementKind.XP:
        return record.xp
    if kind == RequirementKind.TASK_COUNT:
        return len(record.completed_tasks)
    if kind == RequirementKind.UNIT_COUNT:
        return len(record.completed_units)
    return meetings_attended


def evaluate_gate(
    record: LearnerRecord,
    level: Level,
    *,
    meetings_attended: int = 0,
    requirements: Optional[Dict[Level, List[Requirement]]] = None,
) -> GateEvaluation:
    """
    Evaluate the gate out of ``level`` for a learner.

    Args:
        record: Live learner record (read only)
        level: Level whose gate is evaluated
        meetings_attended: Externally supplied attendance counter for meeting requirements
        requirements: Per-level requirement table; defaults to DEFAULT_GATE_REQUIREMENTS

    Returns:
        GateEvaluation. can_advance requires every requirement fulfilled, the
        learner to be at exactly ``level``, and a level to advance to.
    """
    table = DEFAULT_GATE_REQUIREMENTS if requirements is None else requirements
    level = Level(level)
    statuses = []
    for req in table.get(level, []):
        current = current_value(record, req.kind, meetings_attended)
        statuses.append(
            RequirementStatus(
                **req.model_dump(),
                current=current,
                fulfilled=current >= req.target,
            )
        )
    all_fulfilled = all(s.fulfilled for s in statuses)
    following = next_level(level)
    return GateEvaluation(
        level=level,
        next_level=following,
        requirements=statuses,
        all_fulfilled=all_fulfilled,
        can_advance=all_fulfilled and record.level == level and following is not None,
    )
