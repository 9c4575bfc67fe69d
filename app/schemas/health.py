"""Health probe schemas."""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """GET /health: the process is up."""

    status: str = Field(default="ok", description="Service status")


class ReadinessResponse(BaseModel):
    """GET /health/ready: the task store answered."""

    status: str = Field(default="ok", description="Readiness status")
    database: str = Field(default="reachable", description="Task store state")


class ReadinessErrorResponse(BaseModel):
    """GET /health/ready (503): the task store is not configured or did not answer."""

    status: str = Field(default="not_ready", description="Readiness status")
    database: str = Field(default="unreachable", description="Task store state")
    message: str = Field(..., description="Why the store is unavailable")
