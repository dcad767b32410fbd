"""Health check endpoint."""

from datetime import datetime, timezone

from fastapi import APIRouter

SERVICE_NAME = "counter-backend"

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check():
    """Liveness probe. Does not touch the store."""
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "service": SERVICE_NAME,
    }
