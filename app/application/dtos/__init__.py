"""Application DTOs (no ORM dependency)."""

from app.application.dtos.profile import ProfileCreate, ProfileResult, TokenIdentity
from app.application.dtos.task import (
    ProfileSummary,
    TaskCreate,
    TaskFilters,
    TaskPage,
    TaskResult,
    TaskToPersist,
    TeamSummary,
)
from app.application.dtos.team import TeamResult, TeamStatsResult

__all__ = [
    "ProfileCreate",
    "ProfileResult",
    "ProfileSummary",
    "TaskCreate",
    "TaskFilters",
    "TaskPage",
    "TaskResult",
    "TaskToPersist",
    "TeamResult",
    "TeamStatsResult",
    "TeamSummary",
    "TokenIdentity",
]
