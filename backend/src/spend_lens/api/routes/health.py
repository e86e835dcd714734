"""
Health check endpoint.

Provides system health status for monitoring and load balancers.
"""

from fastapi import APIRouter

from spend_lens import __version__
from spend_lens.api.schemas import HealthResponse
from spend_lens.config import get_settings

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Check system health."""
    settings = get_settings()

    return HealthResponse(
        status="healthy",
        version=__version__,
        environment=settings.env,
    )
