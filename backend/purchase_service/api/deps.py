"""FastAPI dependencies shared by the routes."""

from fastapi import Request

from purchase_service.mediator.mediator import Mediator


def get_mediator(request: Request) -> Mediator:
    """Mediator built in the lifespan. Tests replace it via dependency_overrides."""
    return request.app.state.mediator
