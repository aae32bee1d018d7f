"""Health check endpoints."""
from typing import Dict

from fastapi import APIRouter

router = APIRouter()


@router.get("/health", tags=["health"])
async def simple_health_check() -> Dict[str, str]:
    """
    Simple health check for load balancer - no dependency checks.

    Returns HTTP 200 OK if the application is running.
    """
    return {"status": "ok"}
