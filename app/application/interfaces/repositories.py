"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs only; no infrastructure imports.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from app.application.dtos.profile import ProfileCreate, ProfileResult
    from app.application.dtos.task import TaskFilters, TaskResult, TaskToPersist
    from app.application.dtos.team import TeamResult


class ITaskRepository(Protocol):
    """Protocol for task repository (DIP)."""

    async def create(self, data: TaskToPersist) -> TaskResult:
        """Insert a task and return it enriched."""

    async def get_by_id(self, task_id: str) -> TaskResult | None:
        """Return the enriched task, or None."""

    async def list_tasks(self, filters: TaskFilters) -> tuple[list[TaskResult], int]:
        """Return (page of enriched tasks, total rows matching the filters)."""

    async def update(self, task_id: str, changes: dict[str, Any]) -> TaskResult | None:
        """Apply column changes; return the enriched task or None if absent."""

    async def delete(self, task_id: str) -> bool:
        """Delete the task; return False if it did not exist."""

    async def count_by_status(self, team_id: str) -> dict[str, int]:
        """Return {status: count} for tasks owned by team_id."""


class ITeamRepository(Protocol):
    """Protocol for team repository (DIP)."""

    async def list_teams(self) -> list[TeamResult]:
        """Return all teams ordered by name."""

    async def get_by_id(self, team_id: str) -> TeamResult | None:
        """Return team by ID, or None."""

    async def get_by_name(self, name: str) -> TeamResult | None:
        """Return team by exact name, or None."""

    async def create(self, name: str) -> TeamResult:
        """Create a team; raises DuplicateResourceException on name clash."""

    async def find_by_name_fragment(self, fragment: str) -> TeamResult | None:
        """Return the first team (by name) whose name contains fragment, case-insensitively."""


class IProfileRepository(Protocol):
    """Protocol for profile repository (DIP)."""

    async def get_by_id(self, profile_id: str) -> ProfileResult | None:
        """Return profile by ID, or None."""

    async def create(self, data: ProfileCreate) -> ProfileResult:
        """Insert a profile."""

    async def update(
        self, profile_id: str, changes: dict[str, Any]
    ) -> ProfileResult | None:
        """Apply column changes; None if the profile does not exist."""

    async def list_profiles(self) -> list[ProfileResult]:
        """Return all profiles ordered by full name."""

    async def count_by_role(self, role: str) -> int:
        """Return the number of profiles holding role."""

    async def delete(self, profile_id: str, transfer_tasks_to: str) -> bool:
        """Delete a profile, handing its created tasks to transfer_tasks_to."""
