"""
Health check endpoints.
Used for monitoring, deployment readiness checks, and basic connectivity tests.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, HTTPException

from app.core.settings import settings
from app.services.storage import get_blob_store, get_location_store, get_report_store

router = APIRouter(prefix="/health", tags=["Health"])


@router.get("")
async def health_check():
    """
    Basic health check endpoint.
    Returns 200 if service is running.
    """
    return {
        "status": "healthy",
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/stores")
async def stores_health():
    """
    Store readiness check.
    Resolves the configured report, location and media stores without writing anything.
    """
    try:
        backends = {
            "reports": get_report_store().backend,
            "locations": get_location_store().backend,
            "media": get_blob_store().backend,
        }
    except Exception as e:
        raise HTTPException(
            status_code=503,
            detail=f"Store initialization failed: {str(e)}"
        )

    return {
        "status": "healthy",
        "stores": backends,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
