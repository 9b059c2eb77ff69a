"""
Learner endpoints - snapshot, action dispatch, notifications, derived views.
"""

from typing import Any, Dict

from fastapi import APIRouter, Body, HTTPException, status

from pathway.api.deps import CatalogDep, Engine
from pathway.engines.progression.selectors import (
    CenterCapacity,
    GraduationChecklist,
    NextStep,
    center_capacity,
    graduation_checklist,
    recommended_next_step,
)
from pathway.kernel.events.event_types import MarkNotificationRead
from pathway.kernel.models.learner import LearnerRecord
from pathway.schemas.common import ErrorResponse
from pathway.schemas.progress import ActionResult, NotificationList

router = APIRouter()


@router.get("", response_model=LearnerRecord)
async def get_learner(engine: Engine):
    """Current learner snapshot."""
    return engine.get_state()


@router.post("/actions", response_model=ActionResult)
async def dispatch_action(
    engine: Engine,
    action: Dict[str, Any] = Body(..., examples=[{"type": "complete-unit", "id": "ML-01", "xp": 100}]),
):
    """
    Dispatch a raw action.

    Unknown or malformed actions are not an error: they come back with
    changed=false and the unchanged state.
    """
    changed = engine.dispatch(action)
    return ActionResult(changed=changed, state=engine.get_state())


@router.get("/notifications", response_model=NotificationList)
async def list_notifications(engine: Engine, unread_only: bool = False):
    record = engine.get_state()
    items = [n for n in record.notifications if not (unread_only and n.read)]
    return NotificationList(items=items, unread_count=record.unread_count)


@router.post(
    "/notifications/{notification_id}/read",
    response_model=ActionResult,
    responses={404: {"model": ErrorResponse}},
)
async def mark_notification_read(notification_id: str, engine: Engine):
    if not any(n.id == notification_id for n in engine.get_state().notifications):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Notification not found",
        )
    changed = engine.dispatch(MarkNotificationRead(id=notification_id))
    return ActionResult(changed=changed, state=engine.get_state())


@router.get("/next-step", response_model=NextStep)
async def get_next_step(engine: Engine, catalog: CatalogDep):
    return recommended_next_step(engine.get_state(), catalog)


@router.get("/graduation-checklist", response_model=GraduationChecklist)
async def get_graduation_checklist(engine: Engine):
    return graduation_checklist(engine.get_state())


@router.get("/center", response_model=CenterCapacity)
async def get_center_capacity(engine: Engine):
    return center_capacity(engine.get_state())
