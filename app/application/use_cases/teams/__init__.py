"""Team use cases."""

from app.application.use_cases.teams.team_stats import CountForTeam, TeamStatsService

__all__ = ["CountForTeam", "TeamStatsService"]
