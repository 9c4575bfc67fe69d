"""Tasks API: filtered listing, creation (including assistance requests), read, update, delete."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, Response

from app.api.v1.dependencies import (
    get_current_user,
    get_task_service,
    get_task_service_for_write,
)
from app.application.dtos.profile import ProfileResult
from app.application.dtos.task import TaskCreate
from app.application.use_cases.tasks import TaskService, parse_task_filters
from app.core.config import get_settings
from app.core.limiter import limit_writes
from app.schemas.task import (
    TaskCreateRequest,
    TaskEnvelope,
    TaskListResponse,
    TaskResponse,
    TaskUpdateRequest,
)

router = APIRouter()


@router.get("", response_model=TaskListResponse)
async def list_tasks(
    current_user: Annotated[ProfileResult, Depends(get_current_user)],
    service: Annotated[TaskService, Depends(get_task_service)],
    status: str | None = Query(None, description="Comma-separated statuses"),
    priority: str | None = Query(None, description="Comma-separated priorities"),
    assignee_id: str | None = Query(None),
    team_id: str | None = Query(None),
    is_request: str | None = Query(None, description="true or false"),
    search: str | None = Query(None, description="Substring of title or description"),
    sort_field: str | None = Query(None, description="Default created_at"),
    sort_order: str | None = Query(None, description="asc or desc (default desc)"),
    page: str | None = Query(None, description="1-based page number"),
    limit: str | None = Query(None, description="Page size"),
):
    """List tasks visible to the caller, filtered, sorted and paginated."""
    settings = get_settings()
    filters = parse_task_filters(
        status=status,
        priority=priority,
        assignee_id=assignee_id,
        team_id=team_id,
        is_request=is_request,
        search=search,
        sort_field=sort_field,
        sort_order=sort_order,
        page=page,
        limit=limit,
        default_limit=settings.default_page_size,
        max_limit=settings.max_page_size,
    )
    result = await service.list_tasks(filters)
    return TaskListResponse(
        tasks=[TaskResponse.from_result(t) for t in result.tasks],
        total=result.total,
        page=result.page,
        limit=result.limit,
    )


@router.post("", response_model=TaskEnvelope, status_code=201)
@limit_writes
async def create_task(
    request: Request,
    body: TaskCreateRequest,
    current_user: Annotated[ProfileResult, Depends(get_current_user)],
    service: Annotated[TaskService, Depends(get_task_service_for_write)],
):
    """Create a task or an assistance request (status forced to awaiting_approval)."""
    created = await service.create_task(current_user, TaskCreate(**body.model_dump()))
    return TaskEnvelope(task=TaskResponse.from_result(created))


@router.get("/{task_id}", response_model=TaskEnvelope)
async def get_task(
    task_id: str,
    current_user: Annotated[ProfileResult, Depends(get_current_user)],
    service: Annotated[TaskService, Depends(get_task_service)],
):
    """Get one enriched task."""
    task = await service.get_task(task_id)
    return TaskEnvelope(task=TaskResponse.from_result(task))


@router.patch("/{task_id}", response_model=TaskEnvelope)
@limit_writes
async def update_task(
    request: Request,
    task_id: str,
    body: TaskUpdateRequest,
    current_user: Annotated[ProfileResult, Depends(get_current_user)],
    service: Annotated[TaskService, Depends(get_task_service_for_write)],
):
    """Update a task (partial). Explicit null clears assignee_id, due_date or description_json."""
    changes = body.model_dump(include=body.model_fields_set)
    updated = await service.update_task(current_user, task_id, changes)
    return TaskEnvelope(task=TaskResponse.from_result(updated))


@router.delete("/{task_id}", status_code=204)
@limit_writes
async def delete_task(
    request: Request,
    task_id: str,
    current_user: Annotated[ProfileResult, Depends(get_current_user)],
    service: Annotated[TaskService, Depends(get_task_service_for_write)],
) -> Response:
    """Delete a task (creator, assignee or admin)."""
    await service.delete_task(current_user, task_id)
    return Response(status_code=204)
