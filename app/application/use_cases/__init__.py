"""Application use cases: one entry point per workflow."""

from app.application.use_cases.tasks import TaskService, parse_task_filters
from app.application.use_cases.teams import TeamStatsService

__all__ = [
    "TaskService",
    "TeamStatsService",
    "parse_task_filters",
]
