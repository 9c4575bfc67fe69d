"""Team repository. Read methods return TeamResult (DTO)."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.team import TeamResult
from app.domain.exceptions import DuplicateResourceException
from app.infrastructure.persistence.models.team import Team
from app.infrastructure.persistence.repositories.base import (
    BaseRepository,
    escape_like,
    store_errors,
)


def _team_to_result(t: Team) -> TeamResult:
    """Map ORM Team to application TeamResult."""
    return TeamResult(id=t.id, name=t.name, created_at=t.created_at)


class TeamRepository(BaseRepository[Team]):
    """Team repository. Implements ITeamRepository."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Team)

    async def list_teams(self) -> list[TeamResult]:
        """Return all teams ordered by name."""
        with store_errors("fetch teams"):
            result = await self.db.execute(select(Team).order_by(Team.name, Team.id))
            return [_team_to_result(t) for t in result.scalars().all()]

    async def list_teams_oldest_first(self) -> list[TeamResult]:
        """Return all teams ordered by creation time (maintenance scripts)."""
        with store_errors("fetch teams"):
            result = await self.db.execute(
                select(Team).order_by(Team.created_at, Team.id)
            )
            return [_team_to_result(t) for t in result.scalars().all()]

    async def get_by_id(self, team_id: str) -> TeamResult | None:
        with store_errors("fetch team"):
            team = await self.get_model(team_id)
        return _team_to_result(team) if team else None

    async def get_by_name(self, name: str) -> TeamResult | None:
        with store_errors("fetch team"):
            result = await self.db.execute(select(Team).where(Team.name == name))
            team = result.scalar_one_or_none()
        return _team_to_result(team) if team else None

    async def find_by_name_fragment(self, fragment: str) -> TeamResult | None:
        """Return the first team (by name) whose name contains fragment, case-insensitively."""
        pattern = f"%{escape_like(fragment)}%"
        stmt = (
            select(Team)
            .where(Team.name.ilike(pattern, escape="\\"))
            .order_by(Team.name, Team.id)
            .limit(1)
        )
        with store_errors("fetch team"):
            result = await self.db.execute(stmt)
            team = result.scalar_one_or_none()
        return _team_to_result(team) if team else None

    async def create(self, name: str) -> TeamResult:
        """Create a team; raises DuplicateResourceException on name clash."""
        team = Team(name=name)
        with store_errors("create team"):
            try:
                async with self.db.begin_nested():
                    await self.add(team)
            except IntegrityError as exc:
                raise DuplicateResourceException("team", "name", name) from exc
            await self.db.refresh(team)
        return _team_to_result(team)

    async def delete(self, team_id: str) -> bool:
        """Delete the team; return False if it did not exist."""
        with store_errors("delete team"):
            team = await self.get_model(team_id)
            if team is None:
                return False
            await self.remove(team)
        return True
