"""
Action vocabulary accepted by the progression engine.
"""

from pathway.kernel.events.event_types import (
    Action,
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
    parse_action,
    try_parse_action,
)

__all__ = [
    "Action",
    "BaseAction",
    "CompleteUnit",
    "SubmitTask",
    "AttendEvent",
    "AddXp",
    "AdvancePhase",
    "AdvanceLevel",
    "StartSimulation",
    "CompleteSimulation",
    "AddNotification",
    "MarkNotificationRead",
    "MarkAllNotificationsRead",
    "ClearNotifications",
    "CompleteOnboarding",
    "CheckInCenter",
    "CheckOutCenter",
    "RegisterWorkshop",
    "CompleteDailyReview",
    "MarkAttendance",
    "GenerateCertificate",
    "ManualLevelUp",
    "JumpToStage",
    "parse_action",
    "try_parse_action",
]
