"""
Health check endpoint schemas.
"""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """
    Response model for GET /health endpoint.

    Used by load balancers, monitoring systems, and deployment checks.
    """

    status: str = Field(
        default="ok",
        description="Health status of the API (always 'ok' if responding)",
        examples=["ok"]
    )
    service: str = Field(
        ...,
        description="Name of the responding service",
        examples=["invoices-service"]
    )
