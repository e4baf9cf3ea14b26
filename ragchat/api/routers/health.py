"""
Health check API endpoint.

Routes: GET /healthz

System role: Liveness probe
"""

import time

from fastapi import APIRouter
from pydantic import BaseModel

_PROCESS_START = time.monotonic()


class HealthResponse(BaseModel):
    """Health check response model."""

    ok: bool
    uptime: float


router = APIRouter(tags=["health"])


@router.get("/healthz", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Liveness check with process uptime in seconds."""
    return HealthResponse(ok=True, uptime=round(time.monotonic() - _PROCESS_START, 3))
