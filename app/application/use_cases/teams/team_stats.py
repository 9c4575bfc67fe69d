"""Team statistics: per-team task counts by status, read concurrently."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

from app.application.dtos.team import TeamResult, TeamStatsResult
from app.domain.exceptions import TaskTrackException

if TYPE_CHECKING:
    from app.application.interfaces.repositories import ITeamRepository

logger = logging.getLogger(__name__)

# Reads {status: count} for one team; each call uses its own DB session.
CountForTeam = Callable[[str], Awaitable[dict[str, int]]]


class TeamStatsService:
    """Aggregate task counts per team.

    One independent read per team, run with asyncio.gather. A team whose
    read fails gets a zero-filled row flagged degraded; its siblings are
    unaffected.
    """

    def __init__(self, team_repo: ITeamRepository, count_for_team: CountForTeam) -> None:
        self.team_repo = team_repo
        self.count_for_team = count_for_team

    async def _stats_for(self, team: TeamResult) -> TeamStatsResult:
        try:
            counts = await self.count_for_team(team.id)
        except TaskTrackException as exc:
            logger.warning(
                "Could not read tasks for team %s (%s): %s",
                team.id,
                team.name,
                exc.details.get("reason", exc.message),
            )
            return TeamStatsResult.degraded_for(team)
        except Exception:
            # Driver-level failures (connect refused, command timeout) bypass
            # store_errors; they still only cost this team's row.
            logger.exception("Task count failed for team %s (%s)", team.id, team.name)
            return TeamStatsResult.degraded_for(team)
        return TeamStatsResult.from_counts(team, counts)

    async def get_team_stats(self) -> list[TeamStatsResult]:
        """Return one row per team, ordered by team name."""
        teams = await self.team_repo.list_teams()
        results = await asyncio.gather(*(self._stats_for(t) for t in teams))
        return list(results)
