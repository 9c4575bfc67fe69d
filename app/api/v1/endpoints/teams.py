"""Teams API: list, create (admin), and per-team task statistics."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from app.api.v1.dependencies import (
    get_current_user,
    get_team_repo,
    get_team_repo_for_write,
    get_team_stats_service,
    require_permission,
)
from app.application.dtos.profile import ProfileResult
from app.application.interfaces.repositories import ITeamRepository
from app.application.use_cases.teams import TeamStatsService
from app.core.limiter import limit_writes
from app.schemas.team import (
    TeamCreateRequest,
    TeamEnvelope,
    TeamListResponse,
    TeamResponse,
    TeamStatsResponse,
)

router = APIRouter()


@router.get("", response_model=TeamListResponse)
async def list_teams(
    current_user: Annotated[ProfileResult, Depends(get_current_user)],
    repo: Annotated[ITeamRepository, Depends(get_team_repo)],
):
    """List teams ordered by name."""
    teams = await repo.list_teams()
    return TeamListResponse(teams=[TeamResponse.model_validate(t) for t in teams])


@router.post("", response_model=TeamEnvelope, status_code=201)
@limit_writes
async def create_team(
    request: Request,
    body: TeamCreateRequest,
    current_user: Annotated[ProfileResult, Depends(require_permission("can_manage_teams"))],
    repo: Annotated[ITeamRepository, Depends(get_team_repo_for_write)],
):
    """Create a team. 409 if the name is taken."""
    created = await repo.create(body.name.strip())
    return TeamEnvelope(team=TeamResponse.model_validate(created))


@router.get("/stats", response_model=list[TeamStatsResponse])
async def team_stats(
    current_user: Annotated[ProfileResult, Depends(get_current_user)],
    service: Annotated[TeamStatsService, Depends(get_team_stats_service)],
):
    """Task counts by status for every team; unreadable teams come back degraded."""
    stats = await service.get_team_stats()
    return [TeamStatsResponse.model_validate(s) for s in stats]
