"""Domain layer: enums, value objects, lifecycle rules, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from app.domain.enums import TaskPriority, TaskStatus, UserRole
from app.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    ResourceNotFoundException,
    TaskTrackException,
    ValidationException,
)
from app.domain.value_objects import AssistanceRequestMetadata, RolePermissions

__all__ = [
    # Enums
    "TaskPriority",
    "TaskStatus",
    "UserRole",
    # Exceptions
    "AuthenticationException",
    "AuthorizationException",
    "ResourceNotFoundException",
    "TaskTrackException",
    "ValidationException",
    # Value objects
    "AssistanceRequestMetadata",
    "RolePermissions",
]
