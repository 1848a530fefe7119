"""
Health Routes - Liveness endpoint
"""
from fastapi import APIRouter

from app.core.config import settings
from app.services.scheduler import is_running

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check():
    """Liveness check, plus whether verification and the scheduler can run"""
    return {
        "status": "ok",
        "message": "HabitOverflow API is alive",
        "verification_configured": bool(settings.OPENAI_API_KEY),
        "scheduler_running": is_running()
    }
