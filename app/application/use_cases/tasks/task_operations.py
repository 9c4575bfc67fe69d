"""Task operations: list, create (including assistance requests), get, update, delete."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from app.application.dtos.task import (
    TaskCreate,
    TaskFilters,
    TaskPage,
    TaskResult,
    TaskToPersist,
)
from app.application.services.profile_service import team_for_department
from app.domain.enums import TaskStatus
from app.domain.exceptions import (
    AuthorizationException,
    ResourceNotFoundException,
    ValidationException,
)
from app.domain.task_lifecycle import initial_status, validate_transition
from app.domain.value_objects import AssistanceRequestMetadata

if TYPE_CHECKING:
    from app.application.dtos.profile import ProfileResult
    from app.application.interfaces.repositories import (
        ITaskRepository,
        ITeamRepository,
    )

logger = logging.getLogger(__name__)


def requesting_team_id_of(task: TaskResult) -> str | None:
    """Return the team that asked for help, or None when unknown.

    Reads the requesting_team_id column first, then
    description_json._metadata. Rows written before the column existed,
    or without metadata at all, yield None.
    """
    if task.requesting_team_id:
        return task.requesting_team_id
    meta = AssistanceRequestMetadata.from_description(task.description_json)
    return meta.requesting_team_id if meta else None


def _require_title(title: Any) -> str:
    if not isinstance(title, str) or not title.strip():
        raise ValidationException("title is required", field="title")
    return title.strip()


class TaskService:
    """List, create, read, update and delete tasks for an authenticated caller."""

    def __init__(
        self,
        task_repo: ITaskRepository,
        team_repo: ITeamRepository,
    ) -> None:
        self.task_repo = task_repo
        self.team_repo = team_repo

    async def list_tasks(self, filters: TaskFilters) -> TaskPage:
        """Return one page of enriched tasks and the total match count."""
        tasks, total = await self.task_repo.list_tasks(filters)
        return TaskPage(tasks=tasks, total=total, page=filters.page, limit=filters.limit)

    async def _resolve_requesting_team(
        self, caller: ProfileResult, data: TaskCreate
    ) -> str | None:
        if data.requesting_team_id:
            return data.requesting_team_id
        if data.target_team_id and data.team_id and data.team_id != data.target_team_id:
            return data.team_id
        team = await team_for_department(self.team_repo, caller.department)
        return team.id if team else None

    async def create_task(self, caller: ProfileResult, data: TaskCreate) -> TaskResult:
        """Create a task owned by caller.

        Assistance requests are always created awaiting approval, owned by the
        target team, and carry the requesting/target pair both in the
        requesting_team_id column and in description_json._metadata.
        """
        title = _require_title(data.title)
        status = initial_status(data.is_request, data.status)
        team_id = data.team_id
        requesting_team_id: str | None = None
        description_json = data.description_json

        if data.is_request:
            target_team_id = data.target_team_id or data.team_id
            requesting_team_id = await self._resolve_requesting_team(caller, data)
            team_id = target_team_id
            description_json = AssistanceRequestMetadata(
                requesting_team_id=requesting_team_id,
                target_team_id=target_team_id,
            ).merge_into(description_json)
            if requesting_team_id is None:
                logger.warning(
                    "Assistance request by %s created without a requesting team",
                    caller.id,
                )

        created = await self.task_repo.create(
            TaskToPersist(
                title=title,
                status=status,
                priority=data.priority,
                created_by=caller.id,
                description_json=description_json,
                team_id=team_id,
                assignee_id=data.assignee_id,
                requesting_team_id=requesting_team_id,
                is_request=data.is_request,
                due_date=data.due_date,
            )
        )
        logger.info(
            "Task %s created by %s (status=%s, is_request=%s)",
            created.id,
            caller.id,
            created.status.value,
            created.is_request,
        )
        return created

    async def get_task(self, task_id: str) -> TaskResult:
        """Return the enriched task. Raises ResourceNotFoundException if absent."""
        task = await self.task_repo.get_by_id(task_id)
        if task is None:
            raise ResourceNotFoundException("task", task_id)
        return task

    @staticmethod
    def _is_participant(caller: ProfileResult, task: TaskResult) -> bool:
        return caller.id in (task.created_by, task.assignee_id)

    async def update_task(
        self, caller: ProfileResult, task_id: str, changes: dict[str, Any]
    ) -> TaskResult:
        """Apply changes to a task the caller created, is assigned, or may edit as admin.

        A status change must follow the lifecycle transition table.
        """
        task = await self.get_task(task_id)
        if not (
            self._is_participant(caller, task)
            or caller.permissions.can_edit_all_tasks
        ):
            raise AuthorizationException("task", "update")

        changes = dict(changes)
        if "title" in changes:
            changes["title"] = _require_title(changes["title"])
        if "status" in changes:
            new_status = changes["status"]
            if new_status is None:
                raise ValidationException("status cannot be null", field="status")
            new_status = TaskStatus(new_status)
            validate_transition(task.status, new_status)
            changes["status"] = new_status
        if "priority" in changes and changes["priority"] is None:
            raise ValidationException("priority cannot be null", field="priority")
        if not changes:
            return task

        updated = await self.task_repo.update(task_id, changes)
        if updated is None:
            raise ResourceNotFoundException("task", task_id)
        if updated.status != task.status:
            logger.info(
                "Task %s status %s -> %s by %s",
                task_id,
                task.status.value,
                updated.status.value,
                caller.id,
            )
        return updated

    async def delete_task(self, caller: ProfileResult, task_id: str) -> None:
        """Delete a task the caller created, is assigned, or may delete as admin."""
        task = await self.get_task(task_id)
        if not (
            self._is_participant(caller, task) or caller.permissions.can_delete_tasks
        ):
            raise AuthorizationException("task", "delete")
        if not await self.task_repo.delete(task_id):
            raise ResourceNotFoundException("task", task_id)
        logger.info("Task %s deleted by %s", task_id, caller.id)
