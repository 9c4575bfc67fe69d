"""DTOs for profile use cases (no dependency on ORM)."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from app.domain.enums import UserRole
from app.domain.value_objects import RolePermissions, parse_role


@dataclass(frozen=True)
class ProfileResult:
    """Profile read-model."""

    id: str
    full_name: str
    role: str
    department: str | None = None
    title: str | None = None
    location: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def user_role(self) -> UserRole:
        return parse_role(self.role)

    @property
    def permissions(self) -> RolePermissions:
        return RolePermissions.for_role(self.role)


@dataclass(frozen=True)
class ProfileCreate:
    """Fields for a profile created on first authenticated access."""

    id: str
    full_name: str
    role: str = UserRole.MEMBER.value
    department: str | None = None
    title: str | None = None
    location: str | None = None


@dataclass(frozen=True)
class TokenIdentity:
    """Claims read from a verified bearer token."""

    user_id: str
    email: str | None = None
    user_metadata: dict[str, Any] = field(default_factory=dict)
