"""
Health check router.

Liveness check for the helpdesk API. Returns the service name,
status and version; touches no ticket data.
"""

from fastapi import APIRouter

from app.core.config import settings
from app.interfaces.tickets.schemas import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse, summary="Health check")
def health_check() -> HealthResponse:
    return HealthResponse(
        service=settings.project_name, status="ok", version=settings.version
    )
