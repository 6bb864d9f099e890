from typing import Optional

from fastapi import FastAPI, Request

from app.core.config import settings
from app.core.logging import logger, console
from app.routers import api, forwards, health
from app.services.forwards import ForwardSupervisor


def create_app(supervisor: Optional[ForwardSupervisor] = None) -> FastAPI:
    """
    Build the web application around one ForwardSupervisor.

    Tests pass their own supervisor; otherwise one is built from settings.
    """
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        openapi_url=f"{settings.API_V1_STR}/openapi.json",
    )
    if supervisor is None:
        supervisor = ForwardSupervisor.from_settings(settings)
    app.state.forward_supervisor = supervisor

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        response = await call_next(request)
        logger.debug(
            f"{request.method} {request.url.path} - Status: {response.status_code}"
        )
        return response

    app.include_router(forwards.router, tags=["forwards"])
    app.include_router(api.router, prefix=settings.API_V1_STR, tags=["api"])
    app.include_router(health.router, prefix="/health", tags=["health"])

    @app.on_event("startup")
    async def startup_event():
        """Log the effective configuration."""
        logger.info(f"[bold green]Starting {settings.PROJECT_NAME}[/bold green]")
        logger.info(f"Debug mode: {settings.DEBUG}")
        logger.info("Configuration loaded:")
        logger.info(f"  [cyan]socat binary:[/cyan] {settings.SOCAT_BINARY}")
        logger.info(f"  [cyan]Liveness checker:[/cyan] {settings.LIVENESS_CHECKER}")
        logger.info(f"  [cyan]Max log entries:[/cyan] {settings.MAX_LOG_ENTRIES}")
        logger.info(f"  [cyan]Stop wait timeout:[/cyan] {settings.STOP_WAIT_TIMEOUT}")

    @app.on_event("shutdown")
    def shutdown_event():
        """Stop the forwards we started so no socat outlives the server."""
        logger.info(f"Shutting down {settings.PROJECT_NAME}")
        if settings.STOP_FORWARDS_ON_SHUTDOWN:
            app.state.forward_supervisor.stop_all()

    return app


def run() -> None:
    import uvicorn

    console.print("[bold green]Starting socat forward manager...[/bold green]")
    uvicorn.run(
        "app.main:create_app",
        factory=True,
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )
