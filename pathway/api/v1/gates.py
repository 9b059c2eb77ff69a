"""
Gate endpoints - evaluate and pass level gates.
"""

from fastapi import APIRouter, HTTPException, Query, status

from pathway.api.deps import Engine
from pathway.engines.gates.gate_evaluator import GateEvaluation
from pathway.kernel.events.event_types import AdvanceLevel
from pathway.kernel.models.learner import Level
from pathway.schemas.common import ErrorResponse
from pathway.schemas.progress import ActionResult

router = APIRouter()


@router.get("/{level}", response_model=GateEvaluation)
async def get_gate(
    level: Level,
    engine: Engine,
    meetings_attended: int = Query(0, ge=0),
):
    """Requirements for leaving ``level`` with their current values."""
    return engine.evaluate_gate(level, meetings_attended=meetings_attended)


@router.post(
    "/{level}/advance",
    response_model=ActionResult,
    responses={409: {"model": ErrorResponse}},
)
async def advance_gate(
    level: Level,
    engine: Engine,
    meetings_attended: int = Query(0, ge=0),
):
    """Pass the gate out of ``level``. 409 if the gate does not allow it right now."""
    changed = engine.dispatch(AdvanceLevel(level=level, meetings_attended=meetings_attended))
    if not changed:
        evaluation = engine.evaluate_gate(level, meetings_attended=meetings_attended)
        missing = ", ".join(r.label for r in evaluation.missing)
        detail = f"Gate '{level.value}' cannot be passed"
        if missing:
            detail = f"{detail}: {missing}"
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=detail)
    return ActionResult(changed=True, state=engine.get_state())
