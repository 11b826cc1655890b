"""FastAPI dependencies: the application state and the insight gateway.

Both are created once in the app lifespan and stored on app.state, so tests
can swap them for in-memory versions.
"""
from fastapi import Request

from clinicdesk.services.insight_service import InsightGateway
from clinicdesk.services.state import AppState


def get_state(request: Request) -> AppState:
    """Get the process-wide clinic state."""
    return request.app.state.clinic


def get_insight_gateway(request: Request) -> InsightGateway:
    return request.app.state.insight_gateway
