"""Team API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class TeamCreateRequest(BaseModel):
    """Request body for POST /teams."""

    name: str = Field(..., min_length=1, max_length=100)


class TeamResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    created_at: datetime | None = None


class TeamEnvelope(BaseModel):
    team: TeamResponse


class TeamListResponse(BaseModel):
    teams: list[TeamResponse]


class TeamStatsResponse(BaseModel):
    """Task counts by status for one team. degraded marks a failed read (counts are zero)."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    total: int
    todo: int
    in_progress: int
    done: int
    awaiting_approval: int
    pending_review: int
    approved: int
    degraded: bool = False
