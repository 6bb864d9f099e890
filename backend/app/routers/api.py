from typing import Any, List

from fastapi import APIRouter, Depends

from app.dependencies.forward_supervisor import get_forward_supervisor
from app.schemas.forward import EventInfo, ForwardInfo
from app.services.forwards import ForwardSupervisor

router = APIRouter()


@router.get("/forwards", response_model=List[ForwardInfo])
def list_forwards(
    supervisor: ForwardSupervisor = Depends(get_forward_supervisor),
) -> Any:
    """
    List live forwards. Runs a liveness sweep first but leaves the pending
    error for the status page.
    """
    supervisor.sweep()
    return [ForwardInfo.model_validate(record) for record in supervisor.forwards()]


@router.get("/events", response_model=List[EventInfo])
def list_events(
    supervisor: ForwardSupervisor = Depends(get_forward_supervisor),
) -> Any:
    """Event log, newest first."""
    return [EventInfo.model_validate(entry) for entry in supervisor.events()]
