"""Health check endpoint."""

import logging
from datetime import datetime, timezone
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from adapter.mongodb.connection import get_mongodb_client
from api.dependencies import get_settings
from utils.config import Settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/user/health", tags=["health"])


@router.get("")
async def health(settings: Settings = Depends(get_settings)):
    """Health check endpoint with database status."""
    health_status = {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
        "services": {}
    }

    mongo_client = get_mongodb_client(settings.mongo_url)
    if mongo_client:
        health_status["services"]["mongodb"] = {
            "status": "healthy",
            "message": "Connection successful"
        }
    else:
        health_status["services"]["mongodb"] = {
            "status": "unhealthy",
            "message": "Connection failed or not configured"
        }
        health_status["status"] = "degraded"

    status_code = (
        status.HTTP_200_OK if health_status["status"] == "healthy"
        else status.HTTP_503_SERVICE_UNAVAILABLE
    )
    return JSONResponse(content=health_status, status_code=status_code)
