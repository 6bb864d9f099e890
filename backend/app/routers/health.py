import shutil

from fastapi import APIRouter, Depends

from app.core.config import settings
from app.dependencies.forward_supervisor import get_forward_supervisor
from app.schemas.forward import HealthResponse
from app.services.forwards import ForwardSupervisor

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check(
    supervisor: ForwardSupervisor = Depends(get_forward_supervisor),
):
    """
    Backend health: is socat installed, and how many forwards are tracked.
    """
    socat_available = shutil.which(supervisor.process_manager.socat_binary) is not None

    return HealthResponse(
        status="ok" if socat_available else "degraded",
        socat_available=socat_available,
        tracked_forwards=len(supervisor.registry),
        version=settings.VERSION,
    )
