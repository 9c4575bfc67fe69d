"""DTOs for task use cases (no dependency on ORM)."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any

from app.domain.enums import SortOrder, TaskPriority, TaskSortField, TaskStatus


@dataclass(frozen=True)
class TeamSummary:
    """Owning team of a task as shown in list/detail responses."""

    id: str
    name: str


@dataclass(frozen=True)
class ProfileSummary:
    """Creator or assignee of a task as shown in list/detail responses."""

    id: str
    full_name: str
    title: str | None
    department: str | None


@dataclass(frozen=True)
class TaskResult:
    """Task read-model enriched with team and profile summaries.

    team, created_by_profile and assignee_profile are None when the
    foreign key is null or the referenced row is gone.
    """

    id: str
    title: str
    description_json: dict[str, Any] | None
    status: TaskStatus
    priority: TaskPriority
    team_id: str | None
    assignee_id: str | None
    created_by: str
    requesting_team_id: str | None
    is_request: bool
    due_date: date | None
    created_at: datetime
    updated_at: datetime
    team: TeamSummary | None = None
    created_by_profile: ProfileSummary | None = None
    assignee_profile: ProfileSummary | None = None


@dataclass(frozen=True)
class TaskCreate:
    """Caller input for task creation (status and teams not yet resolved)."""

    title: str
    description_json: dict[str, Any] | None = None
    status: TaskStatus | None = None
    priority: TaskPriority = TaskPriority.MEDIUM
    team_id: str | None = None
    assignee_id: str | None = None
    is_request: bool = False
    due_date: date | None = None
    target_team_id: str | None = None
    requesting_team_id: str | None = None


@dataclass(frozen=True)
class TaskToPersist:
    """Fully resolved task row handed to the repository."""

    title: str
    status: TaskStatus
    priority: TaskPriority
    created_by: str
    description_json: dict[str, Any] | None = None
    team_id: str | None = None
    assignee_id: str | None = None
    requesting_team_id: str | None = None
    is_request: bool = False
    due_date: date | None = None


@dataclass(frozen=True)
class TaskFilters:
    """Validated list parameters. Empty collections / None mean "no filter"."""

    statuses: tuple[TaskStatus, ...] = ()
    priorities: tuple[TaskPriority, ...] = ()
    assignee_id: str | None = None
    team_id: str | None = None
    is_request: bool | None = None
    search: str | None = None
    sort_field: TaskSortField = TaskSortField.CREATED_AT
    sort_order: SortOrder = SortOrder.DESC
    page: int = 1
    limit: int = 20

    @property
    def offset(self) -> int:
        """First row of the page: rows [(page-1)*limit, page*limit-1]."""
        return (self.page - 1) * self.limit


@dataclass(frozen=True)
class TaskPage:
    """One page of tasks plus the total number of rows matching the filters."""

    tasks: list[TaskResult] = field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = 20
