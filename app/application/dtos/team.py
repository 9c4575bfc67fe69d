"""DTOs for team use cases (no dependency on ORM)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from app.domain.enums import TaskStatus

# Statuses reported per team; late statuses only count toward total.
STATS_STATUSES: tuple[TaskStatus, ...] = (
    TaskStatus.TODO,
    TaskStatus.IN_PROGRESS,
    TaskStatus.DONE,
    TaskStatus.AWAITING_APPROVAL,
    TaskStatus.PENDING_REVIEW,
    TaskStatus.APPROVED,
)


@dataclass(frozen=True)
class TeamResult:
    """Team read-model."""

    id: str
    name: str
    created_at: datetime | None = None


@dataclass(frozen=True)
class TeamStatsResult:
    """Per-team task counts by status.

    degraded is True when the team's tasks could not be read; the counts
    are then all zero.
    """

    id: str
    name: str
    total: int = 0
    todo: int = 0
    in_progress: int = 0
    done: int = 0
    awaiting_approval: int = 0
    pending_review: int = 0
    approved: int = 0
    degraded: bool = False

    @classmethod
    def from_counts(cls, team: TeamResult, counts: dict[str, int]) -> TeamStatsResult:
        """Build from a {status: count} map; missing statuses count as zero."""
        return cls(
            id=team.id,
            name=team.name,
            total=sum(counts.values()),
            **{s.value: counts.get(s.value, 0) for s in STATS_STATUSES},
        )

    @classmethod
    def degraded_for(cls, team: TeamResult) -> TeamStatsResult:
        """Zero-filled row for a team whose counts could not be read."""
        return cls(id=team.id, name=team.name, degraded=True)
