"""Domain value objects (immutable, self-validating)."""

from app.domain.value_objects.core import (
    ROLE_RANK,
    AssistanceRequestMetadata,
    RolePermissions,
    has_role,
    parse_role,
)

__all__ = [
    "ROLE_RANK",
    "AssistanceRequestMetadata",
    "RolePermissions",
    "has_role",
    "parse_role",
]
