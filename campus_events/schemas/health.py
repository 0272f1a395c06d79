"""Health check API schemas."""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response for GET /health (liveness)."""

    status: str = Field(default="ok", description="Service status")
    version: str | None = Field(default=None, description="Application version")


class ReadinessResponse(BaseModel):
    """Response for GET /health/ready (database reachable)."""

    status: str = Field(default="ok", description="Readiness status")
    database: str = Field(default="ok", description="Database connectivity")
