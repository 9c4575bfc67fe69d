"""Task repository: create, enriched reads, filtered listing, updates, counts."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any

from sqlalchemy import Select, delete, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import joinedload

from app.application.dtos.task import (
    ProfileSummary,
    TaskFilters,
    TaskResult,
    TaskToPersist,
    TeamSummary,
)
from app.domain.enums import SortOrder, TaskStatus
from app.infrastructure.persistence.database import set_user_context
from app.infrastructure.persistence.models.profile import Profile
from app.infrastructure.persistence.models.task import Task
from app.infrastructure.persistence.models.team import Team
from app.infrastructure.persistence.repositories.base import (
    BaseRepository,
    escape_like,
    store_errors,
)

# Columns a caller may change through update(); anything else is ignored.
UPDATABLE_COLUMNS = frozenset(
    {
        "title",
        "description_json",
        "status",
        "priority",
        "team_id",
        "assignee_id",
        "requesting_team_id",
        "due_date",
    }
)


def _team_summary(team: Team | None) -> TeamSummary | None:
    if team is None:
        return None
    return TeamSummary(id=team.id, name=team.name)


def _profile_summary(profile: Profile | None) -> ProfileSummary | None:
    if profile is None:
        return None
    return ProfileSummary(
        id=profile.id,
        full_name=profile.full_name,
        title=profile.title,
        department=profile.department,
    )


def _to_result(t: Task) -> TaskResult:
    """Map Task ORM (relationships loaded) to TaskResult DTO."""
    return TaskResult(
        id=t.id,
        title=t.title,
        description_json=t.description_json,
        status=TaskStatus(t.status),
        priority=t.priority,
        team_id=t.team_id,
        assignee_id=t.assignee_id,
        created_by=t.created_by,
        requesting_team_id=t.requesting_team_id,
        is_request=t.is_request,
        due_date=t.due_date,
        created_at=t.created_at,
        updated_at=t.updated_at,
        team=_team_summary(t.team),
        created_by_profile=_profile_summary(t.creator),
        assignee_profile=_profile_summary(t.assignee),
    )


def _enriched() -> Select[tuple[Task]]:
    return select(Task).options(
        joinedload(Task.team),
        joinedload(Task.creator),
        joinedload(Task.assignee),
    )


def _filter_conditions(filters: TaskFilters) -> list[Any]:
    """Translate filters into WHERE clauses (all ANDed)."""
    conditions: list[Any] = []
    if filters.statuses:
        conditions.append(Task.status.in_(filters.statuses))
    if filters.priorities:
        conditions.append(Task.priority.in_(filters.priorities))
    if filters.assignee_id:
        conditions.append(Task.assignee_id == filters.assignee_id)
    if filters.team_id:
        conditions.append(Task.team_id == filters.team_id)
    if filters.is_request is not None:
        conditions.append(Task.is_request == filters.is_request)
    if filters.search:
        pattern = f"%{escape_like(filters.search)}%"
        # Document body only; the sibling _metadata block is not searchable.
        conditions.append(
            or_(
                Task.title.ilike(pattern, escape="\\"),
                Task.description_json["content"].as_string().ilike(pattern, escape="\\"),
            )
        )
    return conditions


class TaskRepository(BaseRepository[Task]):
    """Task repository. Implements ITaskRepository."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Task)

    async def _load(self, task_id: str) -> TaskResult | None:
        # populate_existing reloads server-side defaults after a flush
        stmt = (
            _enriched()
            .where(Task.id == task_id)
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        task = result.unique().scalar_one_or_none()
        return _to_result(task) if task else None

    async def create(self, data: TaskToPersist) -> TaskResult:
        """Insert a task and return it enriched."""
        task = Task(
            title=data.title,
            description_json=data.description_json,
            status=data.status,
            priority=data.priority,
            team_id=data.team_id,
            assignee_id=data.assignee_id,
            created_by=data.created_by,
            requesting_team_id=data.requesting_team_id,
            is_request=data.is_request,
            due_date=data.due_date,
        )
        with store_errors("create task"):
            await self.add(task)
            created = await self._load(task.id)
        assert created is not None
        return created

    async def get_by_id(self, task_id: str) -> TaskResult | None:
        """Return the enriched task, or None."""
        with store_errors("fetch task"):
            return await self._load(task_id)

    async def list_tasks(self, filters: TaskFilters) -> tuple[list[TaskResult], int]:
        """Return (page of enriched tasks, total rows matching the filters).

        Rows are sorted by the requested field with id as tiebreaker, then
        sliced to [offset, offset + limit).
        """
        conditions = _filter_conditions(filters)
        sort_column = getattr(Task, filters.sort_field.value)
        if filters.sort_order == SortOrder.ASC:
            ordering = (sort_column.asc(), Task.id.asc())
        else:
            ordering = (sort_column.desc(), Task.id.desc())
        count_stmt = select(func.count()).select_from(Task).where(*conditions)
        page_stmt = (
            _enriched()
            .where(*conditions)
            .order_by(*ordering)
            .offset(filters.offset)
            .limit(filters.limit)
        )
        with store_errors("fetch tasks"):
            total = (await self.db.execute(count_stmt)).scalar_one()
            result = await self.db.execute(page_stmt)
            tasks = result.unique().scalars().all()
        return [_to_result(t) for t in tasks], int(total)

    async def update(self, task_id: str, changes: dict[str, Any]) -> TaskResult | None:
        """Apply column changes; return the enriched task or None if absent."""
        with store_errors("update task"):
            task = await self.get_model(task_id)
            if task is None:
                return None
            for key, value in changes.items():
                if key in UPDATABLE_COLUMNS:
                    setattr(task, key, value)
            await self.db.flush()
            return await self._load(task_id)

    async def delete(self, task_id: str) -> bool:
        """Delete the task; return False if it did not exist."""
        with store_errors("delete task"):
            result = await self.db.execute(delete(Task).where(Task.id == task_id))
        return (result.rowcount or 0) > 0

    async def count_by_status(self, team_id: str) -> dict[str, int]:
        """Return {status: count} for tasks owned by team_id."""
        stmt = (
            select(Task.status, func.count())
            .where(Task.team_id == team_id)
            .group_by(Task.status)
        )
        with store_errors("fetch team tasks"):
            rows = (await self.db.execute(stmt)).all()
        return {TaskStatus(status).value: int(count) for status, count in rows}

    async def list_requests_missing_requesting_team(self) -> list[TaskResult]:
        """Return request-flagged tasks with no requesting team column."""
        stmt = (
            _enriched()
            .where(Task.is_request.is_(True), Task.requesting_team_id.is_(None))
            .order_by(Task.created_at.asc(), Task.id.asc())
        )
        with store_errors("fetch assistance requests"):
            result = await self.db.execute(stmt)
            tasks = result.unique().scalars().all()
        return [_to_result(t) for t in tasks]

    async def reassign_team(self, from_team_id: str, to_team_id: str) -> int:
        """Point tasks (owning and requesting team) at to_team_id; return rows moved."""
        with store_errors("reassign tasks"):
            owned = await self.db.execute(
                update(Task)
                .where(Task.team_id == from_team_id)
                .values(team_id=to_team_id)
            )
            await self.db.execute(
                update(Task)
                .where(Task.requesting_team_id == from_team_id)
                .values(requesting_team_id=to_team_id)
            )
        return owned.rowcount or 0


def per_session_status_counter(
    session_factory: async_sessionmaker[AsyncSession],
) -> Callable[[str], Awaitable[dict[str, int]]]:
    """Return count_for_team(team_id) that reads each team in its own session.

    Sessions carry the caller's RLS user context, so concurrent per-team
    reads never share a connection.
    """

    async def count_for_team(team_id: str) -> dict[str, int]:
        with store_errors("fetch team tasks"):
            async with session_factory() as session:
                await set_user_context(session)
                return await TaskRepository(session).count_by_status(team_id)

    return count_for_team
