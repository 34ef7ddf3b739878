from fastapi import APIRouter, Request
from typing import Dict, Any

from launchpad.core.config import settings


router = APIRouter()


@router.get("", response_model=Dict[str, Any])
async def health_check(request: Request) -> Dict[str, Any]:
    """
    Get service status

    Returns:
        Dict containing status, version and whether the launch cache is wired
    """
    return {
        "status": "ok",
        "service": settings.PROJECT_NAME,
        "version": settings.VERSION,
        "environment": settings.ENVIRONMENT,
        "launch_cache": getattr(request.app.state, "cache_service", None) is not None,
    }
