"""Orchestration layer - unit completion state machine."""

from pathway.orchestration.state_machine import (
    AnswerFeedback,
    StepStatus,
    UnitStateMachine,
)

__all__ = [
    "AnswerFeedback",
    "StepStatus",
    "UnitStateMachine",
]
