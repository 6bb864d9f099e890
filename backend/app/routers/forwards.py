from fastapi import APIRouter, Depends, Form, Query, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from app.core.config import settings
from app.core.logging import escape, logger
from app.dependencies.forward_supervisor import get_forward_supervisor
from app.services.forwards import (
    ForwardError,
    ForwardSupervisor,
)

router = APIRouter()

templates = Jinja2Templates(directory=settings.TEMPLATE_DIR)


def _redirect_home() -> RedirectResponse:
    return RedirectResponse(url="/", status_code=303)


@router.get("/", response_class=HTMLResponse)
def index(
    request: Request,
    supervisor: ForwardSupervisor = Depends(get_forward_supervisor),
):
    """
    Status page: reconcile dead forwards, then show forwards, events and the
    pending error (shown once).
    """
    status = supervisor.status()
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "project_name": settings.PROJECT_NAME,
            "processes": status.forwards,
            "event_log": status.events,
            "error": status.error,
        },
    )


@router.post("/start")
def start_forward(
    baseIP: str = Form(""),
    basePort: str = Form(""),
    remoteIP: str = Form(""),
    remotePort: str = Form(""),
    supervisor: ForwardSupervisor = Depends(get_forward_supervisor),
):
    """
    Start a new socat forward from the form. Always redirects back to the
    status page; failures are shown there.
    """
    try:
        supervisor.start_forward(baseIP, basePort, remoteIP, remotePort)
    except ForwardError as e:
        logger.info(f"Start rejected: {escape(str(e))}")
        supervisor.set_error(str(e))
    return _redirect_home()


@router.api_route("/stop", methods=["GET", "POST"])
def stop_forward(
    forward_id: str = Query("", alias="id"),
    supervisor: ForwardSupervisor = Depends(get_forward_supervisor),
):
    """Stop a forward by id and redirect back to the status page."""
    if not forward_id:
        supervisor.set_error("No process ID specified.")
        return _redirect_home()

    try:
        supervisor.stop_forward(forward_id)
    except ForwardError as e:
        logger.info(f"Stop rejected: {escape(str(e))}")
        supervisor.set_error(str(e))
    return _redirect_home()
