# dutyroster/main.py
"""
FastAPI application entry point.
"""

import os
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from dutyroster.core.config import APP_VERSION, IS_PRODUCTION
from dutyroster.core.logging_config import get_logger, setup_logging
from dutyroster.core.request_logging import RequestLoggingMiddleware
from dutyroster.core.sentry_config import init_sentry
from dutyroster.core.storage import StorageError, get_shift_types
from dutyroster.routes.calendar import router as calendar_router
from dutyroster.routes.roster import router as roster_router

# Setup logging FIRST (before any other imports that might log)
setup_logging()
logger = get_logger(__name__)

sentry_enabled = init_sentry()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    logger.info(
        "Application starting up",
        extra={"extra_fields": {"production": IS_PRODUCTION, "python_version": sys.version}},
    )

    # Fail fast on a broken shift type file instead of on the first request
    try:
        shift_types = get_shift_types()
    except StorageError as e:
        logger.error(f"Shift type configuration invalid: {e}", exc_info=True)
        raise
    logger.info(f"Loaded {len(shift_types)} shift types")

    yield

    logger.info("Application shutting down")


app = FastAPI(
    title="Duty Roster",
    description="Layout engine for the hospital duty roster calendar",
    version=APP_VERSION,
    lifespan=lifespan,
)

CORS_ORIGINS = [origin.strip() for origin in os.getenv("CORS_ORIGINS", "").split(",") if origin.strip()]

if IS_PRODUCTION:
    if not CORS_ORIGINS:
        logger.warning(
            "Production mode but no CORS_ORIGINS set. CORS will block all cross-origin requests. "
            "Set CORS_ORIGINS environment variable if the roster frontend runs on another origin."
        )
    allowed_origins = CORS_ORIGINS
    allowed_methods = ["GET", "POST"]
    logger.info(f"CORS configured for production with origins: {allowed_origins}")
else:
    allowed_origins = ["*"]
    allowed_methods = ["*"]
    logger.info("CORS configured for development (permissive)")

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=IS_PRODUCTION,
    allow_methods=allowed_methods,
    allow_headers=["*"],
    expose_headers=["X-Request-ID"],
)

app.add_middleware(RequestLoggingMiddleware)

app.include_router(calendar_router)
app.include_router(roster_router)


@app.get("/health", tags=["health"])
async def health_check():
    """
    Health check endpoint for monitoring.

    Returns 503 when the shift type configuration cannot be loaded.
    """
    try:
        shift_types = get_shift_types()
    except StorageError as e:
        logger.error(f"Health check failed - shift types unavailable: {e}", exc_info=True)
        raise HTTPException(
            status_code=503,
            detail={"status": "unhealthy", "service": "dutyroster", "error": "Shift types unavailable"},
        ) from e

    return JSONResponse(
        status_code=200,
        content={
            "status": "healthy",
            "service": "dutyroster",
            "version": APP_VERSION,
            "shift_types": len(shift_types),
        },
    )
