"""Persistence models: ORM entities and mixins."""

from app.infrastructure.persistence.models.mixins import (
    CreatedAtMixin,
    TimestampMixin,
    UuidMixin,
)
from app.infrastructure.persistence.models.profile import Profile
from app.infrastructure.persistence.models.task import Task
from app.infrastructure.persistence.models.team import Team

__all__ = [
    "CreatedAtMixin",
    "Profile",
    "Task",
    "Team",
    "TimestampMixin",
    "UuidMixin",
]
