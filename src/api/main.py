"""FastAPI application entry point for the community validation engine."""

import os

from fastapi import FastAPI

from src import __version__
from src.api.middleware.logging_middleware import LoggingMiddleware
from src.api.routes.health import router as health_router
from src.api.routes.validation import router as validation_router
from src.infrastructure.observability.logging import configure_structlog

configure_structlog(os.environ.get("ENVIRONMENT", "development"))

app = FastAPI(
    title="Community Validation Engine API",
    description="Community review and consensus for AI-generated insights",
    version=__version__,
)

app.add_middleware(LoggingMiddleware)
app.include_router(health_router)
app.include_router(validation_router)
