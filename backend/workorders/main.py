"""FastAPI application entry point."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from workorders.api.v1 import health, work_orders, work_types
from workorders.config import settings
from workorders.db import dispose_engine
from workorders.logging import setup_logging

# Configure logging before anything else
setup_logging()

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan handler for startup/shutdown events."""
    logger.info("Starting Work Orders API", debug=settings.debug)

    yield

    logger.info("Shutting down Work Orders API")
    await dispose_engine()
    logger.info("Database connections disposed")


app = FastAPI(
    title="Work Orders API",
    description="Maintenance work order tracking API",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.backend_cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API routes
app.include_router(health.router, prefix="/api/v1", tags=["health"])
app.include_router(work_types.router, prefix="/api/v1", tags=["work-types"])
app.include_router(work_orders.router, prefix="/api/v1", tags=["work-orders"])
