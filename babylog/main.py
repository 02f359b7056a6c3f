"""FastAPI application entry point."""

import logging
import os
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from alembic import command
from alembic.config import Config
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from babylog.api import (
    analysis_router,
    custom_event_types_router,
    events_router,
    health_router,
    profiles_router,
)
from babylog.config import get_settings
from babylog.services.correlation import AnalysisValidationError

settings = get_settings()
logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)


def run_migrations() -> None:
    """Run alembic migrations on startup."""
    # Skip migrations during testing
    if os.environ.get("TESTING") == "1":
        logger.info("Skipping migrations in test mode")
        return

    try:
        alembic_cfg = Config("alembic.ini")
        command.upgrade(alembic_cfg, "head")
        logger.info("Database migrations completed successfully")
    except Exception as e:
        logger.error(f"Failed to run migrations: {e}")
        raise


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    run_migrations()
    yield


app = FastAPI(
    title="Babylog API",
    description="Baby care tracking with hashtag correlation analysis",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, restrict to specific origins
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health_router)
app.include_router(profiles_router)
app.include_router(custom_event_types_router)
app.include_router(events_router)
app.include_router(analysis_router)


@app.exception_handler(AnalysisValidationError)
async def analysis_validation_error_handler(
    request: Request, exc: AnalysisValidationError
) -> JSONResponse:
    """Reject analysis parameters the engine refuses to run with."""
    logger.warning(f"Rejected analysis request {request.url.path}: {exc}")
    return JSONResponse(status_code=422, content={"detail": str(exc)})


@app.get("/")
def root() -> dict[str, str]:
    """Root endpoint."""
    return {
        "name": "Babylog API",
        "version": "0.1.0",
        "docs": "/docs",
    }
