"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for authentication, DB sessions and application
services. All services are built from infrastructure implementations here;
routes depend only on these dependencies, not on infra directly.

Authentication runs before any session is opened: get_current_identity
verifies the bearer token and sets the RLS user context, so sessions
opened afterwards (get_db / get_db_transactional) run SET LOCAL for it.
Routes must therefore declare current_user before their service/repo
dependencies.
"""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.profile import ProfileResult, TokenIdentity
from app.application.services.profile_service import ProfileService
from app.application.use_cases.tasks import TaskService
from app.application.use_cases.teams import TeamStatsService
from app.core.request_context import set_user_id
from app.domain.exceptions import AuthenticationException, AuthorizationException
from app.infrastructure.persistence.database import (
    get_db,
    get_db_transactional,
    get_session_factory,
)
from app.infrastructure.persistence.repositories import (
    ProfileRepository,
    TaskRepository,
    TeamRepository,
)
from app.infrastructure.persistence.repositories.task_repo import (
    per_session_status_counter,
)
from app.infrastructure.security.jwt import verify_token

_http_bearer = HTTPBearer(auto_error=False)


def _identity_from_claims(payload: dict[str, Any]) -> TokenIdentity:
    metadata = payload.get("user_metadata")
    return TokenIdentity(
        user_id=str(payload["sub"]),
        email=payload.get("email"),
        user_metadata=metadata if isinstance(metadata, dict) else {},
    )


async def get_current_identity(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
) -> TokenIdentity:
    """Verify the bearer token; raise 401 if missing or invalid. No store access."""
    if credentials is None or not credentials.credentials:
        raise AuthenticationException("Missing bearer token")
    try:
        payload = verify_token(credentials.credentials)
    except ValueError as e:
        raise AuthenticationException("Invalid or expired token") from e
    identity = _identity_from_claims(payload)
    set_user_id(identity.user_id)
    return identity


async def get_current_user(
    identity: Annotated[TokenIdentity, Depends(get_current_identity)],
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> ProfileResult:
    """Return the caller's profile, creating it on first authenticated access."""
    service = ProfileService(ProfileRepository(db), TeamRepository(db))
    return await service.ensure_profile(identity)


def require_permission(permission: str):
    """Dependency factory: require auth and a role-derived permission (e.g. can_manage_teams)."""

    async def _require(
        current_user: Annotated[ProfileResult, Depends(get_current_user)],
    ) -> ProfileResult:
        if not getattr(current_user.permissions, permission, False):
            raise AuthorizationException(message=f"Permission denied: {permission}")
        return current_user

    return _require


async def get_task_service(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TaskService:
    """Task service for reads."""
    return TaskService(TaskRepository(db), TeamRepository(db))


async def get_task_service_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> TaskService:
    """Task service for writes (commit on success)."""
    return TaskService(TaskRepository(db), TeamRepository(db))


async def get_team_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TeamRepository:
    return TeamRepository(db)


async def get_team_repo_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> TeamRepository:
    return TeamRepository(db)


async def get_team_stats_service(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TeamStatsService:
    """Team stats: team list on the request session, per-team counts on their own sessions."""
    return TeamStatsService(
        TeamRepository(db),
        per_session_status_counter(get_session_factory()),
    )


async def get_profile_service(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ProfileService:
    return ProfileService(ProfileRepository(db), TeamRepository(db))


async def get_profile_service_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> ProfileService:
    return ProfileService(ProfileRepository(db), TeamRepository(db))
