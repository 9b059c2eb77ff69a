"""
Domain models for the learner progression core.
"""

from pathway.kernel.models.learner import (
    CenterCheckIn,
    DailyReviewCounters,
    GdrComponents,
    LearnerRecord,
    Level,
    LEVEL_ORDER,
    Notification,
    NotificationKind,
    OnboardingProfile,
    Phase,
    PHASE_ORDER,
    Portfolio,
    SimulationState,
    SimulationStatus,
    WorkshopRegistrations,
)

__all__ = [
    # Enumerations
    "Level",
    "LEVEL_ORDER",
    "Phase",
    "PHASE_ORDER",
    "NotificationKind",
    "SimulationStatus",
    # Record
    "LearnerRecord",
    "Notification",
    "GdrComponents",
    "SimulationState",
    # Auxiliary sub-records
    "OnboardingProfile",
    "CenterCheckIn",
    "WorkshopRegistrations",
    "DailyReviewCounters",
    "Portfolio",
]
