"""
Progression Engine - the single owner and mutator of a learner record.

dispatch() is a synchronous reducer over the action vocabulary in
pathway.kernel.events. Every action is applied to a draft copy of the record;
the draft replaces the live record only when it differs, and only then are
subscribers called. Subscribers therefore never observe a half-applied
action.

Error handling: nothing here raises for bad input. Unknown or malformed
actions, duplicate completions, stale gate requests and unknown stage keys
all leave the record untouched.
"""

import uuid
from datetime import datetime
from typing import Any, Callable, Dict, List, Mapping, Optional, Type, Union

from pathway.config import Settings, get_settings
from pathway.demo.scenarios import build_initial_record, default_record, get_scenario
from pathway.demo.seeded_rng import seeded
from pathway.engines.gates.gate_evaluator import GateEvaluation, Requirement, evaluate_gate
from pathway.engines.progression.stages import StageRegistry
from pathway.engines.progression.thresholds import level_for_xp
from pathway.kernel.events.event_types import (
    AddNotification,
    AddXp,
    AdvanceLevel,
    AdvancePhase,
    AttendEvent,
    BaseAction,
    CheckInCenter,
    CheckOutCenter,
    ClearNotifications,
    CompleteDailyReview,
    CompleteOnboarding,
    CompleteSimulation,
    CompleteUnit,
    GenerateCertificate,
    JumpToStage,
    ManualLevelUp,
    MarkAllNotificationsRead,
    MarkAttendance,
    MarkNotificationRead,
    RegisterWorkshop,
    StartSimulation,
    SubmitTask,
    try_parse_action,
)
from pathway.kernel.models.learner import (
    LearnerRecord,
    Level,
    Notification,
    NotificationKind,
    Phase,
    SimulationState,
    SimulationStatus,
    utcnow,
)
from pathway.logging_config import get_logger

logger = get_logger(__name__)

Listener = Callable[[LearnerRecord], Any]

CHECKOUT_BONUS_XP = 50
ATTENDANCE_XP = 25
DAILY_REVIEW_XP_PER_ITEM = 10

_LEVEL_UP_MESSAGES = {
    Level.JOURNEYMAN: ("Promoted to Journeyman", "Journeyman projects are open to you."),
    Level.MASTER: ("Promoted to Master", "You can lead others now."),
    Level.GRADUATE: ("You graduated!", "You reached the top of the journey."),
}

_PHASE_NAMES = {
    Phase.ONBOARDING: "Onboarding",
    Phase.DISCOVERY: "Discovery",
    Phase.BUILD: "Build",
    Phase.IMPACT: "Impact",
    Phase.GRADUATION: "Graduation",
}


class ProgressionEngine:
    """
    Owns one LearnerRecord and applies actions to it.

    Usage:
        engine = ProgressionEngine(build_initial_record(scenario))
        unsubscribe = engine.subscribe(render)
        engine.dispatch(CompleteUnit(id="ML-01", xp=100))
        engine.dispatch({"type": "submit-task", "id": "T-01", "xp": 50})
    """

    def __init__(
        self,
        initial_record: Optional[LearnerRecord] = None,
        *,
        stages: Optional[StageRegistry] = None,
        gate_requirements: Optional[Dict[Level, List[Requirement]]] = None,
        notification_limit: Optional[int] = None,
        allow_debug_actions: Optional[bool] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        settings = get_settings()
        if initial_record is None:
            initial_record = default_record(settings.demo_seed)
        self._record = initial_record.model_copy(deep=True)
        self.stages = stages if stages is not None else StageRegistry()
        self.gate_requirements = gate_requirements
        self.notification_limit = (
            settings.notification_limit if notification_limit is None else notification_limit
        )
        self.allow_debug_actions = (
            settings.demo_mode if allow_debug_actions is None else allow_debug_actions
        )
        self._clock = clock or utcnow
        self._listeners: List[Listener] = []
        self._trim_notifications(self._record)
        self._handlers: Dict[Type[BaseAction], Callable[[LearnerRecord, Any], None]] = {
            CompleteUnit: self._complete_unit,
            SubmitTask: self._submit_task,
            AttendEvent: self._attend_event,
            AddXp: self._add_xp,
            AdvancePhase: self._advance_phase,
            AdvanceLevel: self._advance_level,
            StartSimulation: self._start_simulation,
            CompleteSimulation: self._complete_simulation,
            AddNotification: self._add_notification,
            MarkNotificationRead: self._mark_notification_read,
            MarkAllNotificationsRead: self._mark_all_notifications_read,
            ClearNotifications: self._clear_notifications,
            CompleteOnboarding: self._complete_onboarding,
            CheckInCenter: self._check_in_center,
            CheckOutCenter: self._check_out_center,
            RegisterWorkshop: self._register_workshop,
            CompleteDailyReview: self._complete_daily_review,
            MarkAttendance: self._mark_attendance,
            GenerateCertificate: self._generate_certificate,
            ManualLevelUp: self._manual_level_up,
            JumpToStage: self._jump_to_stage,
        }

    @classmethod
    def from_settings(
        cls,
        settings: Optional[Settings] = None,
        scenario_id: Optional[str] = None,
    ) -> "ProgressionEngine":
        """Build an engine for the configured (or given) scenario."""
        settings = settings or get_settings()
        scenario_key = scenario_id or settings.default_scenario
        scenario = get_scenario(scenario_key)
        if scenario is None:
            logger.warning("Unknown scenario, using defaults", extra={"scenario": scenario_key})
        return cls(
            build_initial_record(scenario, seed=settings.demo_seed),
            notification_limit=settings.notification_limit,
            allow_debug_actions=settings.demo_mode,
        )

    # --- Public contract ---

    def get_state(self) -> LearnerRecord:
        """Snapshot of the record. Mutating it has no effect on the engine."""
        return self._record.model_copy(deep=True)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a listener called with a fresh snapshot after every state change.

        Returns:
            A function that unsubscribes the listener (safe to call twice)
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def dispatch(self, action: Union[BaseAction, Mapping[str, Any], Any]) -> bool:
        """
        Apply one action.

        Accepts an action model or a raw mapping with a ``type`` key.

        Returns:
            True if the record changed, False for no-ops
        """
        parsed = self._coerce(action)
        if parsed is None:
            logger.debug("Ignoring unknown action", extra={"action": repr(action)[:200]})
            return False

        action_type = getattr(parsed, "type", type(parsed).__name__)
        if parsed.debug and not self.allow_debug_actions:
            logger.warning("Debug action blocked", extra={"action": action_type})
            return False

        handler = self._handlers.get(type(parsed))
        if handler is None:
            logger.debug("No handler for action", extra={"action": action_type})
            return False

        draft = self._record.model_copy(deep=True)
        xp_before = draft.xp
        handler(draft, parsed)
        if not parsed.debug:
            self._apply_level_thresholds(draft, xp_before)
        self._trim_notifications(draft)

        if draft == self._record:
            logger.debug("Action produced no change", extra={"action": action_type})
            return False

        self._record = draft
        logger.debug(
            "Action applied",
            extra={"action": action_type, "xp": draft.xp, "level": draft.level.value},
        )
        self._notify_listeners()
        return True

    def evaluate_gate(self, level: Level, meetings_attended: int = 0) -> GateEvaluation:
        """Evaluate a level gate against the current record."""
        return evaluate_gate(
            self._record,
            level,
            meetings_attended=meetings_attended,
            requirements=self.gate_requirements,
        )

    # --- Internals ---

    @staticmethod
    def _coerce(action: Any) -> Optional[BaseAction]:
        if isinstance(action, BaseAction):
            return action
        if isinstance(action, Mapping):
            return try_parse_action(action)
        return None

    def _notify_listeners(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self.get_state())
            except Exception:
                logger.exception("Listener failed", extra={"listener": repr(listener)})

    def _push_notification(
        self,
        draft: LearnerRecord,
        title: str,
        message: str,
        kind: NotificationKind = NotificationKind.SUCCESS,
    ) -> None:
        notification = Notification(
            id=uuid.uuid4().hex[:12],
            title=title,
            message=message,
            kind=kind,
            read=False,
            timestamp=self._clock(),
        )
        draft.notifications = [notification, *draft.notifications]

    def _trim_notifications(self, draft: LearnerRecord) -> None:
        # Oldest entries go first, read or not
        if self.notification_limit > 0 and len(draft.notifications) > self.notification_limit:
            draft.notifications = draft.notifications[: self.notification_limit]

    def _apply_level_thresholds(self, draft: LearnerRecord, xp_before: int) -> None:
        """Raise the level to whatever the post-action XP has reached. Never lowers it."""
        target = level_for_xp(draft.xp)
        if target.rank <= draft.level.rank:
            return
        previous = draft.level
        draft.level = target
        if target == Level.GRADUATE:
            draft.phase = Phase.GRADUATION
        if level_for_xp(xp_before).rank < target.rank:
            title, message = _LEVEL_UP_MESSAGES[target]
            self._push_notification(draft, title, message)
        logger.info(
            "Level raised",
            extra={"from_level": previous.value, "to_level": target.value, "xp": draft.xp},
        )

    # --- Handlers: progress ---

    def _complete_unit(self, draft: LearnerRecord, action: CompleteUnit) -> None:
        if action.id in draft.completed_units:
            logger.debug("Unit already completed", extra={"unit_id": action.id})
            return
        draft.completed_units.add(action.id)
        draft.xp += action.xp
        self._push_notification(draft, "Unit completed", f"+{action.xp} XP earned.")

    def _submit_task(self, draft: LearnerRecord, action: SubmitTask) -> None:
        if action.id in draft.completed_tasks:
            logger.debug("Task already submitted", extra={"task_id": action.id})
            return
        draft.completed_tasks.add(action.id)
        draft.xp += action.xp
        self._push_notification(
            draft,
            "Task submitted",
            f"Your task is under review. +{action.xp} XP (estimated)",
            NotificationKind.INFO,
        )

    def _attend_event(self, draft: LearnerRecord, action: AttendEvent) -> None:
        draft.xp += action.xp
        self._push_notification(draft, "Event attended", f"+{action.xp} XP earned.")

    def _add_xp(self, draft: LearnerRecord, action: AddXp) -> None:
        draft.xp += action.amount

    def _advance_phase(self, draft: LearnerRecord, action: AdvancePhase) -> None:
        draft.phase = action.phase
        self._push_notification(
            draft,
            "New phase unlocked",
            f"Welcome to the {_PHASE_NAMES[action.phase]} phase!",
        )

    def _advance_level(self, draft: LearnerRecord, action: AdvanceLevel) -> None:
        evaluation = evaluate_gate(
            draft,
            action.level,
            meetings_attended=action.meetings_attended,
            requirements=self.gate_requirements,
        )
        if not evaluation.can_advance or evaluation.next_level is None:
            logger.info(
                "Gate advance rejected",
                extra={
                    "gate": action.level.value,
                    "current_level": draft.level.value,
                    "missing": [r.id for r in evaluation.missing],
                },
            )
            return
        draft.level = evaluation.next_level
        if draft.level == Level.GRADUATE:
            draft.phase = Phase.GRADUATION
        title, message = _LEVEL_UP_MESSAGES[draft.level]
        self._push_notification(draft, f"Gate passed: {title}", message)
        logger.info(
            "Gate passed",
            extra={"gate": action.level.value, "to_level": draft.level.value},
        )

    # --- Handlers: simulation ---

    def _start_simulation(self, draft: LearnerRecord, action: StartSimulation) -> None:
        draft.simulation = SimulationState(
            active_scenario_id=action.id,
            status=SimulationStatus.RUNNING,
            score=0,
        )

    def _complete_simulation(self, draft: LearnerRecord, action: CompleteSimulation) -> None:
        sim = draft.simulation
        if sim.active_scenario_id != action.id or sim.status != SimulationStatus.RUNNING:
            logger.debug(
                "Simulation completion ignored",
                extra={"simulation_id": action.id, "active_id": sim.active_scenario_id},
            )
            return
        sim.status = SimulationStatus.COMPLETED
        sim.score = action.score
        draft.xp += action.xp
        self._push_notification(
            draft,
            "Simulation completed",
            f"You reached the sustainability goal! +{action.xp} XP",
        )

    # --- Handlers: notifications ---

    def _add_notification(self, draft: LearnerRecord, action: AddNotification) -> None:
        self._push_notification(draft, action.title, action.message, action.kind)

    def _mark_notification_read(self, draft: LearnerRecord, action: MarkNotificationRead) -> None:
        for notification in draft.notifications:
            if notification.id == action.id:
                notification.read = True

    def _mark_all_notifications_read(
        self, draft: LearnerRecord, action: MarkAllNotificationsRead
    ) -> None:
        for notification in draft.notifications:
            notification.read = True

    def _clear_notifications(self, draft: LearnerRecord, action: ClearNotifications) -> None:
        if action.keep_unread:
            draft.notifications = [n for n in draft.notifications if not n.read]
        else:
            draft.notifications = []

    # --- Handlers: auxiliary sub-records ---

    def _complete_onboarding(self, draft: LearnerRecord, action: CompleteOnboarding) -> None:
        draft.onboarding = action.profile.model_copy(
            deep=True,
            update={"completed": True, "completed_at": self._clock()},
        )
        if draft.phase.rank < Phase.DISCOVERY.rank:
            draft.phase = Phase.DISCOVERY
        self._push_notification(
            draft, "Journey started", "Your profile is ready. Pick your first goal!"
        )

    def _check_in_center(self, draft: LearnerRecord, action: CheckInCenter) -> None:
        center = draft.center
        if center.active_check_in_id is not None:
            return
        if center.occupancy >= center.capacity:
            self._push_notification(
                draft,
                "Center is full",
                "The center is at capacity. Wait for a seat to free up.",
                NotificationKind.WARNING,
            )
            return
        center.occupancy += 1
        center.active_check_in_id = f"checkin-{uuid.uuid4().hex[:8]}"
        purpose = "learning" if action.purpose == "learning" else "an event"
        self._push_notification(draft, "Welcome!", f"Checked in for {purpose}.")

    def _check_out_center(self, draft: LearnerRecord, action: CheckOutCenter) -> None:
        center = draft.center
        if center.active_check_in_id is None:
            return
        center.occupancy = max(0, center.occupancy - 1)
        center.active_check_in_id = None
        draft.xp += CHECKOUT_BONUS_XP
        self._push_notification(
            draft,
            "See you soon!",
            f"Checked out of the center. +{CHECKOUT_BONUS_XP} XP",
            NotificationKind.INFO,
        )

    def _register_workshop(self, draft: LearnerRecord, action: RegisterWorkshop) -> None:
        if action.workshop_id in draft.workshops.registered_ids:
            return
        draft.workshops.registered_ids.append(action.workshop_id)
        self._push_notification(
            draft,
            "Workshop registration received",
            "Your seat is reserved and added to your calendar.",
        )

    def _complete_daily_review(self, draft: LearnerRecord, action: CompleteDailyReview) -> None:
        review = draft.daily_review
        review.completed_today += action.reviewed
        review.streak += 1
        draft.streak += 1
        draft.xp += action.reviewed * DAILY_REVIEW_XP_PER_ITEM

    def _mark_attendance(self, draft: LearnerRecord, action: MarkAttendance) -> None:
        draft.streak += 1
        draft.xp += ATTENDANCE_XP
        self._push_notification(
            draft,
            "Attendance recorded",
            f"Today's attendance was added. +{ATTENDANCE_XP} XP",
            NotificationKind.INFO,
        )

    def _generate_certificate(self, draft: LearnerRecord, action: GenerateCertificate) -> None:
        if draft.portfolio.certificate_id:
            return
        rng = seeded(f"{draft.seed}:{draft.learner_id}")
        draft.portfolio.certificate_id = f"CERT-{rng.token(7)}"
        self._push_notification(
            draft, "Certificate ready", "Your graduation certificate has been created."
        )

    # --- Handlers: debug / demo ---

    def _manual_level_up(self, draft: LearnerRecord, action: ManualLevelUp) -> None:
        draft.level = action.level
        self._push_notification(
            draft, "Level set", f"Level set to {action.level.value}.", NotificationKind.INFO
        )

    def _jump_to_stage(self, draft: LearnerRecord, action: JumpToStage) -> None:
        staged = self.stages.apply(draft, action.stage)
        if staged is None:
            logger.info("Unknown stage, keeping current record", extra={"stage": action.stage})
            return
        for name in LearnerRecord.model_fields:
            setattr(draft, name, getattr(staged, name))
        self._push_notification(
            draft, f"Stage '{action.stage}' loaded", "Demo state updated.", NotificationKind.INFO
        )
        logger.info("Jumped to stage", extra={"stage": action.stage})
