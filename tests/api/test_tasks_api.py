"""Tasks API tests. Auth and services are replaced through dependency_overrides; no database."""

from datetime import UTC, datetime
from unittest.mock import AsyncMock

import pytest
from httpx import AsyncClient

from app.api.v1.dependencies import (
    get_current_user,
    get_task_service,
    get_task_service_for_write,
)
from app.application.dtos.profile import ProfileResult
from app.application.dtos.task import TaskResult, TaskToPersist, TeamSummary
from app.application.dtos.team import TeamResult
from app.application.use_cases.tasks import TaskService
from app.domain.enums import TaskPriority, TaskStatus
from app.main import app

_NOW = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)
_MEMBER = ProfileResult(id="u-1", full_name="Member", role="member", department="Sales")


def _stored(task_id: str = "t-1", created_by: str = "u-1", **overrides) -> TaskResult:
    data = dict(
        id=task_id,
        title="Write report",
        description_json=None,
        status=TaskStatus.TODO,
        priority=TaskPriority.MEDIUM,
        team_id=None,
        assignee_id=None,
        created_by=created_by,
        requesting_team_id=None,
        is_request=False,
        due_date=None,
        created_at=_NOW,
        updated_at=_NOW,
    )
    data.update(overrides)
    return TaskResult(**data)


def _persisted(data: TaskToPersist) -> TaskResult:
    return _stored(
        task_id="new-task",
        title=data.title,
        description_json=data.description_json,
        status=data.status,
        priority=data.priority,
        team_id=data.team_id,
        created_by=data.created_by,
        requesting_team_id=data.requesting_team_id,
        is_request=data.is_request,
        team=TeamSummary(id=data.team_id, name="Help Desk") if data.team_id else None,
    )


@pytest.fixture
def repos():
    """Mock repos behind a real TaskService, installed for read and write routes."""
    task_repo = AsyncMock()
    task_repo.create.side_effect = _persisted
    team_repo = AsyncMock()
    team_repo.find_by_name_fragment.return_value = TeamResult(id="S", name="Sales Team")
    service = TaskService(task_repo, team_repo)
    app.dependency_overrides[get_current_user] = lambda: _MEMBER
    app.dependency_overrides[get_task_service] = lambda: service
    app.dependency_overrides[get_task_service_for_write] = lambda: service
    return task_repo, team_repo


async def test_list_tasks_without_token_returns_401(client: AsyncClient) -> None:
    response = await client.get("/api/v1/tasks")
    assert response.status_code == 401
    assert response.json()["error"] == "AUTHENTICATION_ERROR"
    assert response.headers["WWW-Authenticate"] == "Bearer"


async def test_invalid_token_returns_401(client: AsyncClient) -> None:
    response = await client.get(
        "/api/v1/tasks", headers={"Authorization": "Bearer not-a-jwt"}
    )
    assert response.status_code == 401
    assert response.json()["message"] == "Invalid or expired token"


async def test_list_tasks_returns_page(client: AsyncClient, repos) -> None:
    task_repo, _ = repos
    task_repo.list_tasks.return_value = ([_stored()], 25)
    response = await client.get(
        "/api/v1/tasks", params={"status": "todo,in_progress", "page": "2", "limit": "10"}
    )
    assert response.status_code == 200
    body = response.json()
    assert body["total"] == 25
    assert (body["page"], body["limit"]) == (2, 10)
    assert body["tasks"][0]["id"] == "t-1"
    assert body["tasks"][0]["team"] is None
    filters = task_repo.list_tasks.call_args.args[0]
    assert filters.statuses == (TaskStatus.TODO, TaskStatus.IN_PROGRESS)
    assert filters.offset == 10


async def test_list_tasks_invalid_status_returns_400(client: AsyncClient, repos) -> None:
    task_repo, _ = repos
    response = await client.get("/api/v1/tasks", params={"status": "finished"})
    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "VALIDATION_ERROR"
    assert body["details"] == {"field": "status"}
    task_repo.list_tasks.assert_not_called()


async def test_list_tasks_limit_above_max_returns_400(client: AsyncClient, repos) -> None:
    response = await client.get("/api/v1/tasks", params={"limit": "1000"})
    assert response.status_code == 400
    assert response.json()["details"] == {"field": "limit"}


async def test_create_task_missing_title_returns_400(client: AsyncClient, repos) -> None:
    task_repo, _ = repos
    response = await client.post("/api/v1/tasks", json={"priority": "high"})
    assert response.status_code == 400
    assert response.json()["error"] == "VALIDATION_ERROR"
    task_repo.create.assert_not_called()


async def test_create_request_is_forced_to_awaiting_approval(
    client: AsyncClient, repos
) -> None:
    response = await client.post(
        "/api/v1/tasks",
        json={"title": "Need laptops", "status": "done", "is_request": True, "team_id": "H"},
    )
    assert response.status_code == 201
    task = response.json()["task"]
    assert task["status"] == "awaiting_approval"
    assert task["team_id"] == "H"
    assert task["team"] == {"id": "H", "name": "Help Desk"}
    assert task["requesting_team_id"] == "S"
    assert task["created_by"] == "u-1"
    assert task["description_json"]["_metadata"]["is_assistance_request"] is True


async def test_create_normal_task_keeps_status(client: AsyncClient, repos) -> None:
    response = await client.post("/api/v1/tasks", json={"title": "Plan", "status": "todo"})
    assert response.status_code == 201
    assert response.json()["task"]["status"] == "todo"


async def test_get_missing_task_returns_404(client: AsyncClient, repos) -> None:
    task_repo, _ = repos
    task_repo.get_by_id.return_value = None
    response = await client.get("/api/v1/tasks/missing")
    assert response.status_code == 404
    assert response.json()["error"] == "RESOURCE_NOT_FOUND"


async def test_patch_invalid_transition_returns_400(client: AsyncClient, repos) -> None:
    task_repo, _ = repos
    task_repo.get_by_id.return_value = _stored(status=TaskStatus.TODO)
    response = await client.patch("/api/v1/tasks/t-1", json={"status": "done"})
    assert response.status_code == 400
    assert response.json()["details"]["from_status"] == "todo"
    task_repo.update.assert_not_called()


async def test_patch_unknown_field_returns_400(client: AsyncClient, repos) -> None:
    response = await client.patch("/api/v1/tasks/t-1", json={"created_by": "u-9"})
    assert response.status_code == 400


async def test_patch_sends_only_given_fields(client: AsyncClient, repos) -> None:
    task_repo, _ = repos
    task_repo.get_by_id.return_value = _stored(assignee_id="u-2")
    task_repo.update.return_value = _stored()
    response = await client.patch("/api/v1/tasks/t-1", json={"assignee_id": None})
    assert response.status_code == 200
    task_repo.update.assert_awaited_once_with("t-1", {"assignee_id": None})


async def test_delete_by_other_member_returns_403(client: AsyncClient, repos) -> None:
    task_repo, _ = repos
    task_repo.get_by_id.return_value = _stored(created_by="someone-else")
    response = await client.delete("/api/v1/tasks/t-1")
    assert response.status_code == 403
    assert response.json()["error"] == "PERMISSION_DENIED"


async def test_delete_by_creator_returns_204(client: AsyncClient, repos) -> None:
    task_repo, _ = repos
    task_repo.get_by_id.return_value = _stored()
    task_repo.delete.return_value = True
    response = await client.delete("/api/v1/tasks/t-1")
    assert response.status_code == 204
