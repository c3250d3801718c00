"""Health check endpoints."""

import logging

from fastapi import APIRouter
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from worldbuilder.core.config import get_settings
from worldbuilder.models.database import get_engine

logger = logging.getLogger(__name__)

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    database: str


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Check application health status.

    Returns:
        Health status including database connectivity.
    """
    settings = get_settings()

    db_status = "healthy"
    try:
        engine = get_engine()
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except RuntimeError:
        db_status = "not initialized"
    except SQLAlchemyError:
        logger.warning("Database health check failed", exc_info=True)
        db_status = "error"

    return HealthResponse(
        status="healthy" if db_status == "healthy" else "degraded",
        version=settings.app_version,
        database=db_status,
    )


@router.get("/ready")
async def readiness_check() -> dict:
    """Kubernetes readiness probe.

    Returns:
        Simple ready status.
    """
    return {"ready": True}


@router.get("/live")
async def liveness_check() -> dict:
    """Kubernetes liveness probe.

    Returns:
        Simple alive status.
    """
    return {"alive": True}
