"""Health check endpoint."""

import os

from fastapi import APIRouter

from rvstay import __version__
from rvstay_api.models.common import HealthResponse

router = APIRouter(tags=["health"])


@router.get(
    "/health",
    summary="Health check",
    response_model=HealthResponse,
)
async def health() -> HealthResponse:
    return HealthResponse(
        status="healthy",
        environment=os.getenv("ENVIRONMENT", "dev"),
        version=__version__,
    )
