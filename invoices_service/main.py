"""
FastAPI application entry point for the invoices service.

This module creates the FastAPI app instance, registers the error boundary
and all routers.
"""

import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from invoices_service.config import settings
from invoices_service.errors import register_error_handlers
from invoices_service.routes.health import router as health_router
from invoices_service.routes.invoices import router as invoices_router
from invoices_service.utils.logging import configure_logging

configure_logging(settings.LOG_LEVEL)

logger = logging.getLogger(__name__)


def _get_cors_origins() -> list[str]:
    """
    Get allowed CORS origins based on environment.

    - ENVIRONMENT=production: Uses CORS_ALLOWED_ORIGINS (no origins if unset)
    - any other environment: Allows all origins for local dev

    Returns:
        List of allowed origin URLs, or ["*"] for development.
    """
    if settings.is_production():
        origins = settings.CORS_ALLOWED_ORIGINS
        if origins:
            logger.info(f"CORS configured for production with {len(origins)} allowed origins")
        else:
            logger.warning(
                "CORS_ALLOWED_ORIGINS not set in production. "
                "No web origins allowed."
            )
        return origins

    logger.info(f"CORS configured for {settings.ENVIRONMENT}: allowing all origins")
    return ["*"]


# Create FastAPI app
app = FastAPI(
    title="Invoices Service API",
    description="Upload, list, download and update invoices",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

register_error_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(health_router)
app.include_router(invoices_router)

logger.info("FastAPI app initialized successfully")
