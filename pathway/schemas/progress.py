"""
Schemas for learner progression endpoints.
"""

from typing import List

from pydantic import BaseModel

from pathway.kernel.models.learner import LearnerRecord, Notification


class ActionResult(BaseModel):
    """Outcome of a dispatched action."""

    changed: bool
    state: LearnerRecord


class NotificationList(BaseModel):
    items: List[Notification]
    unread_count: int
