"""Rate limiting configuration using slowapi.

SCALABILITY NOTES:
- memory:// storage does NOT work with multiple workers/replicas
- Production should set RATELIMIT_STORAGE_URI="redis://host:port/db"
"""

from fastapi import Request, Response
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.responses import JSONResponse

from core.config import get_settings
from core.errors import error_body
from core.logger import get_logger

logger = get_logger(__name__)

settings = get_settings()

if (
    settings.environment != "development"
    and settings.ratelimit_storage_uri == "memory://"
):
    logger.warning(
        "ratelimit.memory_storage",
        environment=settings.environment,
        hint="Set RATELIMIT_STORAGE_URI to a Redis URL for distributed rate limiting",
    )


def _get_request_identifier(request: Request) -> str:
    """Authenticated caller id when known, otherwise the client address."""
    for attr in ("vendor_id", "customer_id"):
        subject_id = getattr(request.state, attr, None)
        if subject_id:
            return f"{attr}:{subject_id}"

    return get_remote_address(request)


_using_redis = settings.ratelimit_storage_uri.startswith("redis://")

limiter = Limiter(
    key_func=_get_request_identifier,
    default_limits=["100/minute"],
    storage_uri=settings.ratelimit_storage_uri,
    in_memory_fallback_enabled=_using_redis,
    key_prefix="nibash:",
)


def rate_limit_exceeded_handler(request: Request, exc: Exception) -> Response:
    """Render slowapi's RateLimitExceeded as a 429 envelope."""
    detail = getattr(exc, "detail", "")
    logger.warning(
        "ratelimit.exceeded",
        identifier=_get_request_identifier(request),
        path=request.url.path,
        limit=detail,
    )
    return JSONResponse(
        status_code=429,
        content=error_body("Rate limit exceeded. Please slow down."),
        headers={"Retry-After": str(getattr(exc, "retry_after", 60))},
    )


def register_rate_limiting(app) -> None:
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)


EXTERNAL_API_LIMIT = "10/minute"

AUTH_LIMIT = "20/minute"
