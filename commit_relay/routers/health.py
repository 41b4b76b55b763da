"""Liveness endpoint for the hosting platform."""

from fastapi import APIRouter

from commit_relay.schemas.health import HealthResponse

router = APIRouter()


@router.get("/healthz", response_model=HealthResponse)
async def healthz() -> HealthResponse:
    """Report that the process is up. Makes no outbound calls."""
    return HealthResponse(status="ok")
