"""Task API schemas."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from app.application.dtos.task import TaskResult
from app.application.use_cases.tasks import requesting_team_id_of
from app.domain.enums import TaskPriority, TaskStatus


class TaskCreateRequest(BaseModel):
    """Request body for POST /tasks.

    For assistance requests (is_request=true) status is ignored; team_id or
    target_team_id names the team asked for help.
    """

    title: str = Field(..., min_length=1, max_length=200)
    description_json: dict[str, Any] | None = None
    status: TaskStatus | None = None
    priority: TaskPriority = TaskPriority.MEDIUM
    team_id: str | None = None
    assignee_id: str | None = None
    is_request: bool = False
    due_date: date | None = None
    target_team_id: str | None = None
    requesting_team_id: str | None = None


class TaskUpdateRequest(BaseModel):
    """Request body for PATCH /tasks/{id}. Only fields present are changed."""

    model_config = ConfigDict(extra="forbid")

    title: str | None = Field(default=None, min_length=1, max_length=200)
    description_json: dict[str, Any] | None = None
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    assignee_id: str | None = None
    due_date: date | None = None


class TeamSummaryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str


class ProfileSummaryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    full_name: str
    title: str | None = None
    department: str | None = None


class TaskResponse(BaseModel):
    """Task enriched with team and profile summaries."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description_json: dict[str, Any] | None = None
    status: TaskStatus
    priority: TaskPriority
    team_id: str | None = None
    assignee_id: str | None = None
    created_by: str
    requesting_team_id: str | None = None
    is_request: bool
    due_date: date | None = None
    created_at: datetime
    updated_at: datetime
    team: TeamSummaryResponse | None = None
    created_by_profile: ProfileSummaryResponse | None = None
    assignee_profile: ProfileSummaryResponse | None = None

    @classmethod
    def from_result(cls, task: TaskResult) -> TaskResponse:
        """Build from TaskResult; requesting_team_id falls back to the metadata."""
        response = cls.model_validate(task)
        return response.model_copy(
            update={"requesting_team_id": requesting_team_id_of(task)}
        )


class TaskEnvelope(BaseModel):
    """Single task response: {"task": {...}}."""

    task: TaskResponse


class TaskListResponse(BaseModel):
    """Page of tasks: {"tasks": [...], "total", "page", "limit"}."""

    tasks: list[TaskResponse]
    total: int
    page: int
    limit: int
