"""
Catalog endpoints - browse content and turn catalog entries into actions.

XP always comes from the catalog entry, never from the client.
"""

from typing import List

from fastapi import APIRouter, HTTPException, status

from pathway.api.deps import CatalogDep, Engine
from pathway.kernel.events.event_types import AttendEvent, SubmitTask
from pathway.pedagogy.catalog import EventDefinition, TaskDefinition, UnitDefinition
from pathway.schemas.common import ErrorResponse
from pathway.schemas.progress import ActionResult

router = APIRouter(responses={404: {"model": ErrorResponse}})


@router.get("/units", response_model=List[UnitDefinition])
async def list_units(catalog: CatalogDep):
    return catalog.units


@router.get("/tasks", response_model=List[TaskDefinition])
async def list_tasks(catalog: CatalogDep):
    return catalog.tasks


@router.get("/events", response_model=List[EventDefinition])
async def list_events(catalog: CatalogDep):
    return catalog.events


@router.post("/tasks/{task_id}/submit", response_model=ActionResult)
async def submit_task(task_id: str, engine: Engine, catalog: CatalogDep):
    task = catalog.get_task(task_id)
    if task is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")
    changed = engine.dispatch(SubmitTask(id=task.id, xp=task.xp))
    return ActionResult(changed=changed, state=engine.get_state())


@router.post("/events/{event_id}/attend", response_model=ActionResult)
async def attend_event(event_id: str, engine: Engine, catalog: CatalogDep):
    event = catalog.get_event(event_id)
    if event is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Event not found")
    changed = engine.dispatch(AttendEvent(id=event.id, xp=event.xp))
    return ActionResult(changed=changed, state=engine.get_state())
