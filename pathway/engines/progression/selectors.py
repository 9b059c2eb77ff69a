"""
Derived, read-only views over a learner record.

Nothing here mutates the record; the API and any UI build on these.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, computed_field

from pathway.kernel.models.learner import LearnerRecord, Level, Phase, SimulationStatus
from pathway.pedagogy.catalog import Catalog, TaskDefinition, UnitDefinition

# Below this XP a discovery-phase learner is pointed at units rather than tasks
DISCOVERY_UNIT_XP_CUTOFF = 200


class NextStepKind(str, Enum):
    PROFILE = "profile"
    UNIT = "unit"
    TASK = "task"
    SIMULATION = "simulation"
    MENTOR = "mentor"
    CELEBRATE = "celebrate"


class NextStep(BaseModel):
    """A single call to action for the dashboard."""

    kind: NextStepKind
    title: str
    description: str
    action_label: str
    target_id: Optional[str] = None


class ChecklistItem(BaseModel):
    id: str
    label: str
    done: bool


class GraduationChecklist(BaseModel):
    items: List[ChecklistItem]

    @computed_field
    @property
    def ready(self) -> bool:
        return all(item.done for item in self.items)


class CapacityStatus(str, Enum):
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    FULL = "full"


class CenterCapacity(BaseModel):
    occupancy: int
    capacity: int
    ratio: float
    free_seats: int
    status: CapacityStatus


def _first_open_unit(record: LearnerRecord, catalog: Catalog) -> Optional[UnitDefinition]:
    path = record.onboarding.primary_path
    candidates = catalog.units_for_path(path) if path else []
    for unit in candidates or catalog.units:
        if unit.id not in record.completed_units:
            return unit
    return None


def _first_open_task(record: LearnerRecord, catalog: Catalog) -> Optional[TaskDefinition]:
    path = record.onboarding.primary_path
    candidates = catalog.tasks_for_path(path) if path else []
    for task in candidates or catalog.tasks:
        if task.id not in record.completed_tasks:
            return task
    return None


def recommended_next_step(record: LearnerRecord, catalog: Catalog) -> NextStep:
    """Pick the next thing the learner should do, based on phase and progress."""
    if record.phase == Phase.ONBOARDING:
        return NextStep(
            kind=NextStepKind.PROFILE,
            title="Complete your profile",
            description="Tell us your goal and pick a career path to get started.",
            action_label="Start onboarding",
        )

    if record.phase == Phase.DISCOVERY:
        unit = _first_open_unit(record, catalog)
        task = _first_open_task(record, catalog)
        if unit is not None and (record.xp < DISCOVERY_UNIT_XP_CUTOFF or task is None):
            return NextStep(
                kind=NextStepKind.UNIT,
                title=unit.title,
                description=f"{unit.minutes} minute unit. +{unit.xp} XP",
                action_label="Start unit",
                target_id=unit.id,
            )
        if task is not None:
            return NextStep(
                kind=NextStepKind.TASK,
                title=task.title,
                description=f"Put what you learned to work. +{task.xp} XP",
                action_label="Open task",
                target_id=task.id,
            )
        return NextStep(
            kind=NextStepKind.MENTOR,
            title="Talk to your mentor",
            description="You cleared every discovery item. Plan the build phase together.",
            action_label="Book a meeting",
        )

    if record.phase == Phase.BUILD:
        return NextStep(
            kind=NextStepKind.SIMULATION,
            title="Enter the Bot Arena",
            description="Test your solution against a live simulation.",
            action_label="Start simulation",
            target_id=record.simulation.active_scenario_id,
        )

    if record.phase == Phase.IMPACT:
        return NextStep(
            kind=NextStepKind.MENTOR,
            title="Mentor a newcomer",
            description="Share what you built with a learner in the discovery phase.",
            action_label="Find a mentee",
        )

    return NextStep(
        kind=NextStepKind.CELEBRATE,
        title="Celebrate your graduation",
        description="Download your certificate and share your portfolio.",
        action_label="View certificate",
        target_id=record.portfolio.certificate_id,
    )


def graduation_checklist(record: LearnerRecord) -> GraduationChecklist:
    items = [
        ChecklistItem(id="xp", label="Earn 5000 XP", done=record.xp >= 5000),
        ChecklistItem(
            id="level",
            label="Reach Master level",
            done=record.level in (Level.MASTER, Level.GRADUATE),
        ),
        ChecklistItem(
            id="simulation",
            label="Complete a simulation",
            done=record.simulation.status == SimulationStatus.COMPLETED,
        ),
        ChecklistItem(id="gdr", label="GDR score above 80", done=record.gdr_score > 80),
        ChecklistItem(
            id="workshops",
            label="Attend 3 workshops",
            done=len(record.workshops.attended_ids) >= 3,
        ),
    ]
    return GraduationChecklist(items=items)


def center_capacity(record: LearnerRecord) -> CenterCapacity:
    center = record.center
    ratio = center.occupancy / center.capacity if center.capacity > 0 else 1.0
    if ratio >= 1:
        status = CapacityStatus.FULL
    elif ratio > 0.8:
        status = CapacityStatus.HIGH
    elif ratio > 0.5:
        status = CapacityStatus.MODERATE
    else:
        status = CapacityStatus.LOW
    return CenterCapacity(
        occupancy=center.occupancy,
        capacity=center.capacity,
        ratio=ratio,
        free_seats=max(0, center.capacity - center.occupancy),
        status=status,
    )
