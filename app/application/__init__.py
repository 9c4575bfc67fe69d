"""Application layer: interfaces, services, use cases.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (repositories).
"""

from app.application.interfaces import (
    IProfileRepository,
    ITaskRepository,
    ITeamRepository,
)
from app.application.services.profile_service import ProfileService
from app.application.use_cases.tasks import TaskService
from app.application.use_cases.teams import TeamStatsService

__all__ = [
    "IProfileRepository",
    "ITaskRepository",
    "ITeamRepository",
    "ProfileService",
    "TaskService",
    "TeamStatsService",
]
