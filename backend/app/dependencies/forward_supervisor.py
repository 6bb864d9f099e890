"""
Dependency injection for the Forward Supervisor
"""

from fastapi import Request

from app.services.forwards import ForwardSupervisor


def get_forward_supervisor(request: Request) -> ForwardSupervisor:
    """
    Dependency injection for ForwardSupervisor.

    Returns the instance built by create_app and stored on app.state, so every
    request shares the same registry and event log.
    """
    return request.app.state.forward_supervisor
