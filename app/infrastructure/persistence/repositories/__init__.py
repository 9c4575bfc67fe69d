"""Persistence repositories. Re-exports for dependency injection."""

from app.infrastructure.persistence.repositories.base import BaseRepository
from app.infrastructure.persistence.repositories.profile_repo import ProfileRepository
from app.infrastructure.persistence.repositories.task_repo import TaskRepository
from app.infrastructure.persistence.repositories.team_repo import TeamRepository

__all__ = [
    "BaseRepository",
    "ProfileRepository",
    "TaskRepository",
    "TeamRepository",
]
