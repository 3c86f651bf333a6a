"""Health check endpoints."""

from datetime import UTC, datetime

from fastapi import APIRouter, Request

from core.database import DatabaseDep
from core.errors import ServiceUnavailable
from core.logger import get_logger
from core.ratelimit import limiter
from schemas import HealthResponse, MessageResponse, PingResponse

logger = get_logger(__name__)

router = APIRouter(tags=["health"])


@router.get("/api/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Liveness check. Does not touch the database."""
    return HealthResponse(timestamp=datetime.now(UTC))


@router.get("/api/vendors-ping", response_model=PingResponse)
async def vendors_ping() -> PingResponse:
    return PingResponse()


@router.get(
    "/ready",
    response_model=MessageResponse,
    responses={503: {"description": "Database unreachable"}},
)
@limiter.limit("30/minute")
async def ready(request: Request, db: DatabaseDep) -> MessageResponse:
    """Readiness endpoint: 200 only when the database answers ``SELECT 1``."""
    try:
        await db.ping()
    except Exception as e:
        logger.warning("readiness.db_unavailable", error_type=type(e).__name__)
        raise ServiceUnavailable("Database unavailable") from e

    return MessageResponse(message="ready")
