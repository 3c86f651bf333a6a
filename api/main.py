"""FastAPI application for the Nibash marketplace API."""

import asyncio
from contextlib import asynccontextmanager

import fastapi
from fastapi.middleware.cors import CORSMiddleware

from core.config import get_settings
from core.database import Database, create_engine, init_db
from core.errors import register_error_handlers
from core.llm_client import close_llm_http_client
from core.logger import configure_logging, get_logger
from core.middleware import RequestContextMiddleware, SecurityHeadersMiddleware
from core.ratelimit import register_rate_limiting
from routes import (
    auth_router,
    chat_router,
    customers_router,
    health_router,
    lookups_router,
    nearby_router,
    products_router,
    ratings_router,
    recommendations_router,
    services_router,
    vendor_auth_router,
    vendors_router,
)

configure_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: fastapi.FastAPI):
    """Create the DB pool at startup, dispose it (and the chat client) on shutdown."""
    database = Database(create_engine())
    app.state.database = database

    try:
        async with asyncio.timeout(60):
            await init_db(database)
        logger.info("init.complete")
    except TimeoutError:
        logger.error(
            "init.timeout",
            hint="Startup hung; check DB connectivity",
        )
        await database.dispose()
        raise RuntimeError("Application startup timed out") from None
    except Exception:
        logger.exception("init.failed")
        await database.dispose()
        raise

    try:
        yield
    finally:
        await close_llm_http_client()
        await database.dispose()


_settings = get_settings()

app = fastapi.FastAPI(
    title="Nibash Marketplace API",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs" if _settings.enable_docs or _settings.debug else None,
    redoc_url="/redoc" if _settings.enable_docs or _settings.debug else None,
    openapi_url=("/openapi.json" if _settings.enable_docs or _settings.debug else None),
)

register_error_handlers(app)
register_rate_limiting(app)

app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=_settings.allowed_origins,
    allow_credentials="*" not in _settings.allowed_origins,
    allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type", "X-Request-Id"],
    expose_headers=["X-Request-Duration-Ms", "X-Request-Id"],
    max_age=600,
)
# Outermost, so the request id is bound before anything else logs.
app.add_middleware(RequestContextMiddleware)

app.include_router(health_router)
app.include_router(auth_router)
app.include_router(vendor_auth_router)
app.include_router(vendors_router)
app.include_router(customers_router)
app.include_router(products_router)
app.include_router(services_router)
app.include_router(nearby_router)
app.include_router(recommendations_router)
app.include_router(ratings_router)
app.include_router(lookups_router)
app.include_router(chat_router)
