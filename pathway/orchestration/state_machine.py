"""
State machine for a single learning unit run.

A unit is an ordered list of typed steps. The cursor only moves forward when
the current step's completion criterion holds; closing the last step emits one
CompleteUnit action.

Contract with ProgressionEngine: the machine emits on every full run, including
replays after restart(). Exactly-once XP is the engine's job, keyed on the
unit id in LearnerRecord.completed_units.
"""

from enum import Enum
from typing import Callable, Dict, List, Optional, Set

from pydantic import BaseModel

from pathway.config import Settings, get_settings
from pathway.kernel.events.event_types import CompleteUnit
from pathway.logging_config import get_logger
from pathway.pedagogy.catalog import StepType, UnitDefinition, UnitStep

logger = get_logger(__name__)

DEFAULT_REFLECTION_MIN_WORDS = 10


class StepStatus(str, Enum):
    """Position of a step relative to the cursor."""
    PENDING = "pending"
    CURRENT = "current"
    DONE = "done"


class AnswerFeedback(BaseModel):
    """Feedback for one quiz answer. Correctness never blocks progress."""

    question_index: int
    selected: int
    correct: bool
    explanation: str = ""


def count_words(text: str) -> int:
    return len(text.split())


class UnitStateMachine:
    """Drives one run through a unit's steps."""

    def __init__(
        self,
        unit: UnitDefinition,
        on_complete: Optional[Callable[[CompleteUnit], object]] = None,
        reflection_min_words: int = DEFAULT_REFLECTION_MIN_WORDS,
    ):
        self.unit = unit
        self.on_complete = on_complete
        self.reflection_min_words = reflection_min_words
        self.runs_completed = 0
        self._reset_inputs()

    @classmethod
    def from_settings(
        cls,
        unit: UnitDefinition,
        on_complete: Optional[Callable[[CompleteUnit], object]] = None,
        settings: Optional[Settings] = None,
    ) -> "UnitStateMachine":
        settings = settings or get_settings()
        return cls(unit, on_complete=on_complete, reflection_min_words=settings.reflection_min_words)

    def _reset_inputs(self) -> None:
        self._index = 0
        self._complete = False
        # Inputs are tracked per step index
        self._answers: Dict[int, Dict[int, int]] = {}
        self._checked: Dict[int, Set[int]] = {}
        self._reflections: Dict[int, str] = {}
        self._attachments: Dict[int, str] = {}

    # --- Read-only state ---

    @property
    def is_complete(self) -> bool:
        return self._complete

    @property
    def current_index(self) -> int:
        return self._index

    @property
    def current_step(self) -> Optional[UnitStep]:
        """The step under the cursor, or None once the unit is complete."""
        if self._complete or not self.unit.steps:
            return None
        return self.unit.steps[self._index]

    @property
    def progress(self) -> float:
        """Fraction of steps done."""
        total = len(self.unit.steps)
        if total == 0 or self._complete:
            return 1.0
        return self._index / total

    def step_status(self, index: int) -> StepStatus:
        if self._complete or index < self._index:
            return StepStatus.DONE
        if index == self._index:
            return StepStatus.CURRENT
        return StepStatus.PENDING

    def statuses(self) -> List[StepStatus]:
        return [self.step_status(i) for i in range(len(self.unit.steps))]

    # --- Inputs for the current step ---

    def _require_step(self, step_type: StepType) -> UnitStep:
        step = self.current_step
        if step is None or step.type != step_type:
            raise ValueError(f"Current step is not a {step_type.value} step")
        return step

    def answer(self, question_index: int, option_index: int) -> AnswerFeedback:
        """
        Record an answer for a quiz question on the current step.

        The first answer sticks; answering again returns the original feedback.

        Raises:
            ValueError: current step is not a quiz
            IndexError: question or option out of range
        """
        step = self._require_step(StepType.QUIZ)
        question = step.questions[question_index]
        if not 0 <= option_index < len(question.options):
            raise IndexError("option index out of range")
        answers = self._answers.setdefault(self._index, {})
        selected = answers.setdefault(question_index, option_index)
        return AnswerFeedback(
            question_index=question_index,
            selected=selected,
            correct=selected == question.correct,
            explanation=question.explanation,
        )

    def toggle_item(self, item_index: int) -> bool:
        """Flip a checklist item on the current step; returns its new state."""
        step = self._require_step(StepType.CHECKLIST)
        if not 0 <= item_index < len(step.items):
            raise IndexError("checklist item out of range")
        checked = self._checked.setdefault(self._index, set())
        if item_index in checked:
            checked.discard(item_index)
            return False
        checked.add(item_index)
        return True

    def write_reflection(self, text: str) -> int:
        """Store reflection text for the current step; returns its word count."""
        self._require_step(StepType.REFLECTION)
        self._reflections[self._index] = text
        return count_words(text)

    def attach(self, artifact_ref: str) -> None:
        """Attach an artifact reference to the current upload step. Content is never inspected."""
        self._require_step(StepType.UPLOAD)
        if not artifact_ref or not artifact_ref.strip():
            raise ValueError("artifact reference must not be empty")
        self._attachments[self._index] = artifact_ref

    # --- Transitions ---

    def min_words_for(self, step: UnitStep) -> int:
        return step.min_words if step.min_words is not None else self.reflection_min_words

    def can_advance(self) -> bool:
        """Whether the current step's completion criterion holds."""
        if self._complete:
            return False
        step = self.current_step
        if step is None:
            # A unit without steps completes on its first advance
            return True
        i = self._index
        if step.type == StepType.READ:
            return True
        if step.type == StepType.QUIZ:
            return len(self._answers.get(i, {})) == len(step.questions)
        if step.type == StepType.CHECKLIST:
            return len(self._checked.get(i, set())) == len(step.items)
        if step.type == StepType.REFLECTION:
            return count_words(self._reflections.get(i, "")) >= self.min_words_for(step)
        if step.type == StepType.UPLOAD:
            return i in self._attachments
        return False

    def advance(self) -> bool:
        """
        Close the current step and move on.

        Returns False without changing anything when the criterion does not
        hold. Closing the last step completes the unit and emits CompleteUnit.
        """
        if not self.can_advance():
            return False
        if self._index < len(self.unit.steps) - 1:
            self._index += 1
            return True
        self._complete = True
        self.runs_completed += 1
        self._emit()
        return True

    def back(self) -> bool:
        """Step back one step. Not possible from the first step or after completion."""
        if self._complete or self._index == 0:
            return False
        self._index -= 1
        return True

    def restart(self) -> None:
        """Reset cursor and inputs for a replay of the same unit."""
        self._reset_inputs()

    def _emit(self) -> None:
        action = CompleteUnit(id=self.unit.id, xp=self.unit.xp)
        logger.debug(
            "Unit completed",
            extra={"unit_id": self.unit.id, "xp": self.unit.xp, "run": self.runs_completed},
        )
        if self.on_complete is not None:
            self.on_complete(action)
