"""Profile API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.domain.enums import UserRole
from app.schemas.team import TeamResponse


class ProfileResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    full_name: str
    role: str
    department: str | None = None
    title: str | None = None
    location: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class PermissionsResponse(BaseModel):
    """Role-derived capabilities of the caller."""

    model_config = ConfigDict(from_attributes=True)

    can_access_admin: bool
    can_manage_users: bool
    can_manage_teams: bool
    can_create_tasks: bool
    can_edit_all_tasks: bool
    can_delete_tasks: bool
    can_view_reports: bool


class ProfileMeResponse(BaseModel):
    """GET /profiles/me: the caller's profile, permissions and department-matched team."""

    profile: ProfileResponse
    permissions: PermissionsResponse
    team: TeamResponse | None = None


class ProfileEnvelope(BaseModel):
    profile: ProfileResponse


class ProfileListResponse(BaseModel):
    profiles: list[ProfileResponse]


class ProfileUpdateRequest(BaseModel):
    """Request body for PATCH /profiles/me. role is not accepted here."""

    model_config = ConfigDict(extra="forbid")

    full_name: str | None = Field(default=None, min_length=1, max_length=255)
    title: str | None = Field(default=None, max_length=255)
    department: str | None = Field(default=None, max_length=255)
    location: str | None = Field(default=None, max_length=255)


class RoleUpdateRequest(BaseModel):
    """Request body for PATCH /profiles/{id}/role."""

    role: UserRole
