"""SLP Way Admin – FastAPI application entry-point."""

from contextlib import asynccontextmanager
import logging
from collections.abc import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.middleware.cors import CORSMiddleware

from slp_admin.config import settings
from slp_admin.exceptions import (
    AdminError,
    BackendError,
    FileTooLarge,
    NetworkError,
    ValidationError,
)
from slp_admin.middleware import AccessGateMiddleware
from slp_admin.router import auth, dashboard, entities, health, upload
from slp_admin.services.storage_service import ensure_storage_bucket, reset_storage_state
from slp_admin.services.supabase_service import SupabaseClient

# Configure logging from settings
logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# ──────────────────────────────────────────────
# Lifespan: open the Supabase client and provision storage once
# ──────────────────────────────────────────────
@asynccontextmanager
async def lifespan(application: FastAPI) -> AsyncIterator[None]:
    logger.info("🚀 Connecting to Supabase at %s …", settings.supabase_url)
    client = SupabaseClient(settings.supabase_url, settings.supabase_key, settings.storage_bucket)
    application.state.supabase = client
    if await ensure_storage_bucket(client):
        logger.info("✅ Storage bucket %s ready.", settings.storage_bucket)
    yield
    logger.info("🛑 Shutting down – closing Supabase client …")
    await client.aclose()
    reset_storage_state()


# ──────────────────────────────────────────────
# Application factory
# ──────────────────────────────────────────────
app = FastAPI(
    title="SLP Way Admin API",
    description="Manage places, events, services and brands of the San Luis Way directory.",
    version="1.0.0",
    lifespan=lifespan,
)

# ── access gate for /admin/* and /login ──
app.add_middleware(AccessGateMiddleware)

# ── CORS middleware (configured from environment variables) ──
app.add_middleware(
    middleware_class=CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_methods_list,
    allow_headers=settings.cors_headers_list,
)

logger.info("CORS configured with origins: %s", settings.cors_origins_list)


# ──────────────────────────────────────────────
# Error responses
# ──────────────────────────────────────────────
def _status_for(exc: AdminError) -> int:
    if isinstance(exc, FileTooLarge):
        return 413
    if isinstance(exc, ValidationError):
        return 400
    if isinstance(exc, BackendError):
        return 502
    if isinstance(exc, NetworkError):
        return 503
    return 500


@app.exception_handler(AdminError)
async def admin_error_handler(_request: Request, exc: AdminError) -> JSONResponse:
    return JSONResponse(
        status_code=_status_for(exc),
        content={"detail": exc.message, "error": type(exc).__name__},
    )


# ── register routers ──
app.get('/')(lambda: {"message": "SLP Way Admin API. Visit /docs for API documentation."})
app.include_router(health.router)
app.include_router(auth.router)
app.include_router(dashboard.router)
app.include_router(upload.router)
for entity_router in entities.routers:
    app.include_router(entity_router)
