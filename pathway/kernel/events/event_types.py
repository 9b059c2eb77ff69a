"""
Action definitions using Pydantic for validation.

These are the payloads accepted by ProgressionEngine.dispatch. Each action
carries a literal ``type`` tag so raw mappings (e.g. from the HTTP API) can be
parsed into the right model through ``parse_action``.
"""

from typing import Annotated, Any, ClassVar, Dict, Literal, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from pathway.kernel.models.learner import Level, NotificationKind, OnboardingProfile, Phase


class BaseAction(BaseModel):
    """Base action payload structure."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    # Debug/demo overrides bypass the monotonic xp/level rules
    debug: ClassVar[bool] = False


# Progress actions

class CompleteUnit(BaseAction):
    """A learning unit was finished. Granted once per unit id."""

    type: Literal["complete-unit"] = "complete-unit"
    id: str = Field(min_length=1)
    xp: int = Field(ge=0)


class SubmitTask(BaseAction):
    """A task was submitted. Granted once per task id."""

    type: Literal["submit-task"] = "submit-task"
    id: str = Field(min_length=1)
    xp: int = Field(ge=0)
    grade: Optional[float] = None  # externally supplied, carried only


class AttendEvent(BaseAction):
    """Event attendance. Repeatable."""

    type: Literal["attend-event"] = "attend-event"
    id: Optional[str] = None
    xp: int = Field(ge=0)


class AddXp(BaseAction):
    type: Literal["add-xp"] = "add-xp"
    amount: int = Field(ge=0)


class AdvancePhase(BaseAction):
    type: Literal["advance-phase"] = "advance-phase"
    phase: Phase


class AdvanceLevel(BaseAction):
    """Move past a level gate. Rejected unless the gate allows it right now."""

    type: Literal["advance-level"] = "advance-level"
    level: Level
    meetings_attended: int = Field(default=0, ge=0)


# Simulation actions

class StartSimulation(BaseAction):
    type: Literal["start-simulation"] = "start-simulation"
    id: str = Field(min_length=1)


class CompleteSimulation(BaseAction):
    type: Literal["complete-simulation"] = "complete-simulation"
    id: str = Field(min_length=1)
    score: float = Field(ge=0, le=100)
    xp: int = Field(ge=0)


# Notification actions

class AddNotification(BaseAction):
    type: Literal["add-notification"] = "add-notification"
    title: str
    message: str
    kind: NotificationKind = NotificationKind.INFO


class MarkNotificationRead(BaseAction):
    type: Literal["mark-notification-read"] = "mark-notification-read"
    id: str


class MarkAllNotificationsRead(BaseAction):
    type: Literal["mark-all-notifications-read"] = "mark-all-notifications-read"


class ClearNotifications(BaseAction):
    """Explicit eviction of the feed."""

    type: Literal["clear-notifications"] = "clear-notifications"
    keep_unread: bool = False


# Auxiliary sub-record actions

class CompleteOnboarding(BaseAction):
    type: Literal["complete-onboarding"] = "complete-onboarding"
    profile: OnboardingProfile = Field(default_factory=OnboardingProfile)


class CheckInCenter(BaseAction):
    type: Literal["check-in-center"] = "check-in-center"
    purpose: Literal["learning", "event"] = "learning"


class CheckOutCenter(BaseAction):
    type: Literal["check-out-center"] = "check-out-center"


class RegisterWorkshop(BaseAction):
    type: Literal["register-workshop"] = "register-workshop"
    workshop_id: str = Field(min_length=1)


class CompleteDailyReview(BaseAction):
    type: Literal["complete-daily-review"] = "complete-daily-review"
    reviewed: int = Field(ge=0)


class MarkAttendance(BaseAction):
    type: Literal["mark-attendance"] = "mark-attendance"


class GenerateCertificate(BaseAction):
    type: Literal["generate-certificate"] = "generate-certificate"


# Debug / demo overrides

class ManualLevelUp(BaseAction):
    """Set the level directly. Demo only."""

    debug: ClassVar[bool] = True

    type: Literal["manual-level-up"] = "manual-level-up"
    level: Level


class JumpToStage(BaseAction):
    """Overwrite the record from the stage registry. Demo only."""

    debug: ClassVar[bool] = True

    type: Literal["jump-to-stage"] = "jump-to-stage"
    stage: str


Action = Annotated[
    Union[
        CompleteUnit,
        SubmitTask,
        AttendEvent,
        AddXp,
        AdvancePhase,
        AdvanceLevel,
        StartSimulation,
        CompleteSimulation,
        AddNotification,
        MarkNotificationRead,
        MarkAllNotificationsRead,
        ClearNotifications,
        CompleteOnboarding,
        CheckInCenter,
        CheckOutCenter,
        RegisterWorkshop,
        CompleteDailyReview,
        MarkAttendance,
        GenerateCertificate,
        ManualLevelUp,
        JumpToStage,
    ],
    Field(discriminator="type"),
]

_action_adapter: TypeAdapter = TypeAdapter(Action)


def parse_action(payload: Mapping[str, Any]) -> BaseAction:
    """
    Parse a raw mapping into its action model.

    Raises:
        pydantic.ValidationError: unknown ``type`` or invalid fields
    """
    return _action_adapter.validate_python(dict(payload))


def try_parse_action(payload: Mapping[str, Any]) -> Optional[BaseAction]:
    """Like parse_action but returns None instead of raising."""
    try:
        return parse_action(payload)
    except ValidationError:
        return None


def action_schema() -> Dict[str, Any]:
    """JSON schema of the action union (used for API docs)."""
    return _action_adapter.json_schema()
