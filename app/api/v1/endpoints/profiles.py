"""Profiles API: caller profile with permissions, self-edit, listing, role changes, removal."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response

from app.api.v1.dependencies import (
    get_current_user,
    get_profile_service,
    get_profile_service_for_write,
    require_permission,
)
from app.application.dtos.profile import ProfileResult
from app.application.services.profile_service import ProfileService
from app.core.limiter import limit_writes
from app.schemas.profile import (
    PermissionsResponse,
    ProfileEnvelope,
    ProfileListResponse,
    ProfileMeResponse,
    ProfileResponse,
    ProfileUpdateRequest,
    RoleUpdateRequest,
)
from app.schemas.team import TeamResponse

router = APIRouter()


@router.get("", response_model=ProfileListResponse)
async def list_profiles(
    current_user: Annotated[ProfileResult, Depends(get_current_user)],
    service: Annotated[ProfileService, Depends(get_profile_service)],
):
    """List all profiles ordered by full name."""
    profiles = await service.list_profiles()
    return ProfileListResponse(
        profiles=[ProfileResponse.model_validate(p) for p in profiles]
    )


@router.get("/me", response_model=ProfileMeResponse)
async def get_me(
    current_user: Annotated[ProfileResult, Depends(get_current_user)],
    service: Annotated[ProfileService, Depends(get_profile_service)],
):
    """Return the caller's profile, role-derived permissions and matched team."""
    team = await service.team_for_department(current_user.department)
    return ProfileMeResponse(
        profile=ProfileResponse.model_validate(current_user),
        permissions=PermissionsResponse.model_validate(current_user.permissions),
        team=TeamResponse.model_validate(team) if team else None,
    )


@router.patch("/me", response_model=ProfileEnvelope)
@limit_writes
async def update_me(
    request: Request,
    body: ProfileUpdateRequest,
    current_user: Annotated[ProfileResult, Depends(get_current_user)],
    service: Annotated[ProfileService, Depends(get_profile_service_for_write)],
):
    """Update the caller's name, title, department or location."""
    changes = body.model_dump(include=body.model_fields_set)
    updated = await service.update_me(current_user.id, changes)
    return ProfileEnvelope(profile=ProfileResponse.model_validate(updated))


@router.patch("/{profile_id}/role", response_model=ProfileEnvelope)
@limit_writes
async def set_role(
    request: Request,
    profile_id: str,
    body: RoleUpdateRequest,
    current_user: Annotated[ProfileResult, Depends(require_permission("can_manage_users"))],
    service: Annotated[ProfileService, Depends(get_profile_service_for_write)],
):
    """Change a profile's role (admin only)."""
    updated = await service.set_role(current_user, profile_id, body.role)
    return ProfileEnvelope(profile=ProfileResponse.model_validate(updated))


@router.delete("/{profile_id}", status_code=204)
@limit_writes
async def delete_profile(
    request: Request,
    profile_id: str,
    current_user: Annotated[ProfileResult, Depends(require_permission("can_manage_users"))],
    service: Annotated[ProfileService, Depends(get_profile_service_for_write)],
) -> Response:
    """Remove a user's profile (admin only, never the caller's own)."""
    await service.delete_profile(current_user, profile_id)
    return Response(status_code=204)
