"""Profile application service: first-access creation, self-edit, roles, removal, team matching."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from app.application.dtos.profile import ProfileCreate, ProfileResult, TokenIdentity
from app.domain.enums import UserRole
from app.domain.exceptions import (
    AuthorizationException,
    DuplicateResourceException,
    ResourceNotFoundException,
    ValidationException,
)

if TYPE_CHECKING:
    from app.application.dtos.team import TeamResult
    from app.application.interfaces.repositories import (
        IProfileRepository,
        ITeamRepository,
    )

logger = logging.getLogger(__name__)

DEFAULT_FULL_NAME = "User"
SELF_EDITABLE_FIELDS = frozenset({"full_name", "title", "department", "location"})


async def team_for_department(
    team_repo: ITeamRepository, department: str | None
) -> TeamResult | None:
    """Return the first team (by name) whose name contains department, case-insensitively.

    A best-effort association: None for an empty department or no match.
    """
    if not department or not department.strip():
        return None
    return await team_repo.find_by_name_fragment(department.strip())


def _metadata_text(metadata: dict[str, Any], key: str) -> str | None:
    value = metadata.get(key)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


class ProfileService:
    """Profiles keyed by auth identity; created on first authenticated access."""

    def __init__(
        self, profile_repo: IProfileRepository, team_repo: ITeamRepository
    ) -> None:
        self._profile_repo = profile_repo
        self._team_repo = team_repo

    async def ensure_profile(self, identity: TokenIdentity) -> ProfileResult:
        """Return the caller's profile, creating a member profile if none exists."""
        profile = await self._profile_repo.get_by_id(identity.user_id)
        if profile is not None:
            return profile
        meta = identity.user_metadata or {}
        data = ProfileCreate(
            id=identity.user_id,
            full_name=_metadata_text(meta, "full_name") or DEFAULT_FULL_NAME,
            role=UserRole.MEMBER.value,
            department=_metadata_text(meta, "department"),
            title=_metadata_text(meta, "title"),
            location=_metadata_text(meta, "location"),
        )
        try:
            created = await self._profile_repo.create(data)
        except DuplicateResourceException:
            # Created concurrently by another request for the same identity.
            existing = await self._profile_repo.get_by_id(identity.user_id)
            if existing is None:
                raise
            return existing
        logger.info("Created profile for %s", identity.user_id)
        return created

    async def team_for_department(self, department: str | None) -> TeamResult | None:
        return await team_for_department(self._team_repo, department)

    async def list_profiles(self) -> list[ProfileResult]:
        return await self._profile_repo.list_profiles()

    async def update_me(
        self, profile_id: str, changes: dict[str, Any]
    ) -> ProfileResult:
        """Update the caller's own profile fields. Role is not self-editable."""
        disallowed = set(changes) - SELF_EDITABLE_FIELDS
        if disallowed:
            raise ValidationException(
                f"Cannot update: {', '.join(sorted(disallowed))}",
                field=sorted(disallowed)[0],
            )
        if "full_name" in changes and not (changes["full_name"] or "").strip():
            raise ValidationException("full_name cannot be empty", field="full_name")
        updated = await self._profile_repo.update(profile_id, changes)
        if updated is None:
            raise ResourceNotFoundException("profile", profile_id)
        return updated

    async def set_role(
        self, actor: ProfileResult, profile_id: str, role: UserRole
    ) -> ProfileResult:
        """Change a profile's role. Requires can_manage_users."""
        if not actor.permissions.can_manage_users:
            raise AuthorizationException("profile", "change role")
        updated = await self._profile_repo.update(profile_id, {"role": role.value})
        if updated is None:
            raise ResourceNotFoundException("profile", profile_id)
        logger.info("Role of %s set to %s by %s", profile_id, role.value, actor.id)
        return updated

    async def delete_profile(self, actor: ProfileResult, profile_id: str) -> None:
        """Remove another user's profile. Requires can_manage_users.

        The caller cannot remove themselves and the last admin cannot be
        removed. Tasks the profile created pass to the caller.
        """
        if not actor.permissions.can_manage_users:
            raise AuthorizationException("profile", "delete")
        if profile_id == actor.id:
            raise ValidationException("Cannot delete your own profile", field="profile_id")
        target = await self._profile_repo.get_by_id(profile_id)
        if target is None:
            raise ResourceNotFoundException("profile", profile_id)
        if target.user_role == UserRole.ADMIN:
            admins = await self._profile_repo.count_by_role(UserRole.ADMIN.value)
            if admins <= 1:
                raise ValidationException("Cannot delete the last admin", field="profile_id")
        if not await self._profile_repo.delete(profile_id, transfer_tasks_to=actor.id):
            raise ResourceNotFoundException("profile", profile_id)
        logger.info("Profile %s deleted by %s", profile_id, actor.id)
