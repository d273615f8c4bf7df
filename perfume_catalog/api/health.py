"""Health check endpoints for monitoring service and dependency status."""
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from fastapi import APIRouter
from sqlalchemy import text

from perfume_catalog.core.config import get_settings
from perfume_catalog.core.db import engine

router = APIRouter(tags=["health"])
settings = get_settings()


@router.get("/health")
async def health_check() -> dict[str, str]:
    """Basic health check endpoint.

    Returns:
        Simple status response for load balancers
    """
    return {
        "status": "OK",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "service": settings.app_name,
    }


@router.get("/health/detailed")
async def detailed_health_check() -> dict[str, Any]:
    """Detailed health check for the database and the upload directory."""
    health_status: dict[str, Any] = {
        "status": "healthy",
        "components": {},
    }

    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        health_status["components"]["database"] = {
            "status": "healthy",
            "message": "Database connection successful",
        }
    except Exception as e:
        health_status["status"] = "unhealthy"
        health_status["components"]["database"] = {
            "status": "unhealthy",
            "message": f"Database connection failed: {str(e)}",
        }

    upload_dir = Path(settings.upload_dir)
    if upload_dir.is_dir() and os.access(upload_dir, os.W_OK):
        health_status["components"]["uploads"] = {
            "status": "healthy",
            "message": f"Upload directory {upload_dir} is writable",
        }
    else:
        health_status["status"] = "unhealthy"
        health_status["components"]["uploads"] = {
            "status": "unhealthy",
            "message": f"Upload directory {upload_dir} is missing or not writable",
        }

    return health_status
