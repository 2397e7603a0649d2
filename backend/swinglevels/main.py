"""
SwingLevels Backend - FastAPI Application

Main entry point for the backend API.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI

from swinglevels.core.config import settings
from swinglevels.api.v1 import router as api_v1_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Candle source: {settings.data_source}")

    yield

    logger.info("Shutting down...")


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    SwingLevels Support/Resistance API

    ## Pipeline
    - **ATR**: Average true range sizes the Renko bricks
    - **Renko**: Fixed-size bricks, single reversals filtered out
    - **Pivots**: Local highs/lows over a window of bricks
    - **Swings**: Higher-high / lower-low classification with running support and resistance

    ## Core Principles
    - Deterministic, in-memory computation
    - "No level yet" is a value (null), not an error
    - Signals only; no orders are placed
    """,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# Include API routes
app.include_router(api_v1_router, prefix="/api/v1")


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "app": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment,
    }


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "SwingLevels Backend API",
        "docs": "/docs",
        "health": "/health",
    }
