"""Task use cases."""

from app.application.use_cases.tasks.task_operations import (
    TaskService,
    requesting_team_id_of,
)
from app.application.use_cases.tasks.task_query import parse_bool, parse_task_filters

__all__ = [
    "TaskService",
    "parse_bool",
    "parse_task_filters",
    "requesting_team_id_of",
]
