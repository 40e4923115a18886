"""
FastAPI application entry point.
"""

import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from app.api.v1.router import router as v1_router
from app.api.feeds import router as feeds_router
from app.config import get_settings, validate_settings
from app.core.security import sanitize_dict_for_logging
from app.schemas.common import HealthResponse


settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup/shutdown."""
    # Startup
    logger.info(f"Starting with settings: {sanitize_dict_for_logging(settings.model_dump())}")
    is_valid, error = validate_settings(settings)
    if not is_valid:
        logger.warning(f"Upstream not configured, product and feed endpoints will fail: {error}")
    yield


app = FastAPI(
    title="Vendor Dashboard API",
    description="Product status toggling and catalog feed for a Shopify vendor",
    version="1.0.0",
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, specify allowed origins
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(v1_router, prefix="/api/v1")
app.include_router(feeds_router, prefix="/api")


@app.get("/api/v1/health", response_model=HealthResponse, tags=["health"])
async def health_check():
    """Health check endpoint."""
    return HealthResponse(ok=True)


@app.get("/", tags=["root"])
async def root():
    """Root endpoint."""
    return {
        "message": "Vendor Dashboard API",
        "version": "1.0.0",
        "docs": "/docs",
        "feed": "/api/feed"
    }


def run():
    """Console entry point: serve the app with uvicorn."""
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower()
    )
