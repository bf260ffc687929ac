"""
Health check route for the invoices service.

This endpoint is PUBLIC and does not touch the invoice service, so it answers
even when Supabase is unreachable.
"""

import logging

from fastapi import APIRouter

from invoices_service.schemas.health import HealthResponse

logger = logging.getLogger(__name__)

# Create router with no prefix (mounted at root level in main.py)
router = APIRouter(tags=["system"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check endpoint",
    status_code=200,
)
async def health_check() -> HealthResponse:
    """
    Public health check endpoint.

    Example response:
        {
            "status": "ok",
            "service": "invoices-service"
        }
    """
    logger.debug("Health check endpoint called")

    return HealthResponse(status="ok", service="invoices-service")
