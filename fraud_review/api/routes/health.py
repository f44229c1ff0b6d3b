"""Health check routes."""

import logging

from fastapi import APIRouter
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from fraud_review import __version__
from fraud_review.core.database import get_engine

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["Health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str


class ReadyResponse(BaseModel):
    """Readiness check response."""

    status: str
    database: str


@router.get(
    "",
    response_model=HealthResponse,
    summary="Health check",
    description="Check if the service is running.",
)
async def health_check() -> HealthResponse:
    """Return service health status."""
    return HealthResponse(
        status="healthy",
        version=__version__,
    )


@router.get(
    "/ready",
    response_model=ReadyResponse,
    summary="Readiness check",
    description="Check if the service can reach its database.",
)
async def readiness_check() -> ReadyResponse:
    """Return service readiness status."""
    try:
        async with get_engine().connect() as conn:
            await conn.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as e:
        logger.warning("Readiness check failed", extra={"error": str(e)})
        return ReadyResponse(status="degraded", database="disconnected")
    return ReadyResponse(
        status="ready",
        database="connected",
    )


@router.get(
    "/live",
    summary="Liveness check",
    description="Liveness probe endpoint.",
)
async def liveness_check() -> dict:
    """Return liveness status."""
    return {"status": "alive"}
