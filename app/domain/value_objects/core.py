"""Domain value objects for task tracking.

Value objects are immutable types that represent domain concepts with
self-validation. They have no identity, only value.
"""

from dataclasses import dataclass
from typing import Any, ClassVar

from app.domain.enums import UserRole

# Static two-level hierarchy: higher rank includes everything below it.
ROLE_RANK: dict[UserRole, int] = {
    UserRole.MEMBER: 1,
    UserRole.ADMIN: 2,
}


def parse_role(value: str | UserRole | None) -> UserRole:
    """Return the UserRole for a stored value; unknown or missing roles are MEMBER."""
    if isinstance(value, UserRole):
        return value
    try:
        return UserRole(value)
    except ValueError:
        return UserRole.MEMBER


def has_role(user_role: str | UserRole | None, required: UserRole) -> bool:
    """Return True if user_role ranks at or above required."""
    return ROLE_RANK[parse_role(user_role)] >= ROLE_RANK[required]


@dataclass(frozen=True)
class RolePermissions:
    """Boolean capabilities derived from a role by rank comparison."""

    can_access_admin: bool
    can_manage_users: bool
    can_manage_teams: bool
    can_create_tasks: bool
    can_edit_all_tasks: bool
    can_delete_tasks: bool
    can_view_reports: bool

    @classmethod
    def for_role(cls, role: str | UserRole | None) -> "RolePermissions":
        """Derive permissions for role (admin-level flags require rank >= admin)."""
        is_admin = has_role(role, UserRole.ADMIN)
        return cls(
            can_access_admin=is_admin,
            can_manage_users=is_admin,
            can_manage_teams=is_admin,
            can_create_tasks=True,
            can_edit_all_tasks=is_admin,
            can_delete_tasks=is_admin,
            can_view_reports=is_admin,
        )


@dataclass(frozen=True)
class AssistanceRequestMetadata:
    """Requesting/target team pair carried in description_json._metadata.

    requesting_team_id may be None: older request rows were written without
    it, and readers must treat it as "unknown requesting team".
    """

    KEY: ClassVar[str] = "_metadata"

    requesting_team_id: str | None
    target_team_id: str | None

    def to_metadata(self) -> dict[str, Any]:
        """Return the keys merged into description_json._metadata."""
        return {
            "requesting_team_id": self.requesting_team_id,
            "target_team_id": self.target_team_id,
            "is_assistance_request": True,
        }

    def merge_into(self, description_json: dict[str, Any] | None) -> dict[str, Any]:
        """Return a copy of description_json with this metadata merged in.

        Existing _metadata keys are preserved unless overwritten here.
        """
        document = dict(description_json or {})
        existing = document.get(self.KEY)
        merged = dict(existing) if isinstance(existing, dict) else {}
        merged.update(self.to_metadata())
        document[self.KEY] = merged
        return document

    @classmethod
    def from_description(
        cls, description_json: dict[str, Any] | None
    ) -> "AssistanceRequestMetadata | None":
        """Read the metadata from a description document; None if absent."""
        if not isinstance(description_json, dict):
            return None
        meta = description_json.get(cls.KEY)
        if not isinstance(meta, dict):
            return None
        return cls(
            requesting_team_id=meta.get("requesting_team_id") or None,
            target_team_id=meta.get("target_team_id") or None,
        )
