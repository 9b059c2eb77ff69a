"""
Learner record - the aggregate owned and mutated by the progression engine.
"""

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional, Set

from pydantic import BaseModel, Field


class Level(str, Enum):
    """Learner ranks, in ascending order."""
    APPRENTICE = "apprentice"
    JOURNEYMAN = "journeyman"
    MASTER = "master"
    GRADUATE = "graduate"

    @property
    def rank(self) -> int:
        return LEVEL_ORDER.index(self)


class Phase(str, Enum):
    """Journey phases, in ascending order."""
    ONBOARDING = "onboarding"    # week 0: sign-up and profile
    DISCOVERY = "discovery"      # weeks 1-4
    BUILD = "build"              # weeks 5-8
    IMPACT = "impact"            # weeks 9-11
    GRADUATION = "graduation"    # week 12

    @property
    def rank(self) -> int:
        return PHASE_ORDER.index(self)


LEVEL_ORDER: List[Level] = list(Level)
PHASE_ORDER: List[Phase] = list(Phase)


class NotificationKind(str, Enum):
    """Feed entry severity."""
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


class SimulationStatus(str, Enum):
    """Status of the learner's active simulation."""
    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Notification(BaseModel):
    """A feed entry; the feed is kept newest first."""

    id: str = Field(default_factory=lambda: uuid.uuid4().hex[:12])
    title: str
    message: str
    kind: NotificationKind = NotificationKind.INFO
    read: bool = False
    timestamp: datetime = Field(default_factory=utcnow)


class GdrComponents(BaseModel):
    """GDR telemetry breakdown. Carried, never interpreted by the engine."""

    technical_role: float = 0
    teamwork: float = 0
    presentation: float = 0
    reliability: float = 0
    social_impact: float = 0


class SimulationState(BaseModel):
    active_scenario_id: Optional[str] = None
    status: SimulationStatus = SimulationStatus.IDLE
    score: float = Field(default=0, ge=0, le=100)


class OnboardingProfile(BaseModel):
    """Answers collected during onboarding."""

    goal: Optional[str] = None
    skill_level: Optional[str] = None
    primary_path: Optional[str] = None
    secondary_paths: List[str] = []
    city: Optional[str] = None
    center_id: Optional[str] = None
    challenge: Optional[str] = None
    completed: bool = False
    completed_at: Optional[datetime] = None


class CenterCheckIn(BaseModel):
    """Physical learning center presence."""

    capacity: int = 30
    occupancy: int = 0
    active_check_in_id: Optional[str] = None


class WorkshopRegistrations(BaseModel):
    registered_ids: List[str] = []
    attended_ids: List[str] = []


class DailyReviewCounters(BaseModel):
    due_count: int = 5
    completed_today: int = 0
    streak: int = 0


class Portfolio(BaseModel):
    artifact_ids: List[str] = []
    certificate_id: Optional[str] = None


class LearnerRecord(BaseModel):
    """
    Everything the engine knows about one learner.

    completed_units / completed_tasks / collected_badges double as the
    idempotency guard: membership means XP for that id was already granted.
    """

    # Identity
    learner_id: str = "learner-demo"
    name: str = "Demo Learner"
    seed: str = "DEMO_SEED_2026"

    # Progress
    level: Level = Level.APPRENTICE
    xp: int = Field(default=0, ge=0)
    phase: Phase = Phase.ONBOARDING
    streak: int = 0
    gdr_score: float = 0
    gdr_components: GdrComponents = Field(default_factory=GdrComponents)

    # Completion sets
    completed_units: Set[str] = set()
    completed_tasks: Set[str] = set()
    collected_badges: Set[str] = set()

    notifications: List[Notification] = []
    simulation: SimulationState = Field(default_factory=SimulationState)

    # Auxiliary sub-records
    onboarding: OnboardingProfile = Field(default_factory=OnboardingProfile)
    center: CenterCheckIn = Field(default_factory=CenterCheckIn)
    workshops: WorkshopRegistrations = Field(default_factory=WorkshopRegistrations)
    daily_review: DailyReviewCounters = Field(default_factory=DailyReviewCounters)
    portfolio: Portfolio = Field(default_factory=Portfolio)

    @property
    def unread_count(self) -> int:
        return sum(1 for n in self.notifications if not n.read)
