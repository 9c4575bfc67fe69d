"""Pydantic request/response schemas for the API."""

from app.schemas.health import HealthResponse
from app.schemas.profile import (
    ProfileMeResponse,
    ProfileResponse,
    ProfileUpdateRequest,
    RoleUpdateRequest,
)
from app.schemas.task import (
    TaskCreateRequest,
    TaskEnvelope,
    TaskListResponse,
    TaskResponse,
    TaskUpdateRequest,
)
from app.schemas.team import TeamCreateRequest, TeamResponse, TeamStatsResponse

__all__ = [
    "HealthResponse",
    "ProfileMeResponse",
    "ProfileResponse",
    "ProfileUpdateRequest",
    "RoleUpdateRequest",
    "TaskCreateRequest",
    "TaskEnvelope",
    "TaskListResponse",
    "TaskResponse",
    "TaskUpdateRequest",
    "TeamCreateRequest",
    "TeamResponse",
    "TeamStatsResponse",
]
