"""Insert the predefined teams if they are missing.

Usage:
    python -m scripts.seed_teams

Requires: DATABASE_URL (Postgres), migrations applied. Existing teams are left alone.
"""

from __future__ import annotations

import asyncio
import logging

from app.infrastructure.persistence.repositories.team_repo import TeamRepository
from scripts._db import prepare

logger = logging.getLogger("scripts.seed_teams")

PREDEFINED_TEAMS = (
    "IT Team",
    "Sales Team",
    "Marketing Team",
    "Design Team",
    "HR Team",
    "Finance Team",
)


async def run() -> int:
    session_factory = prepare()
    created = 0
    async with session_factory() as session:
        async with session.begin():
            repo = TeamRepository(session)
            for name in PREDEFINED_TEAMS:
                if await repo.get_by_name(name) is not None:
                    logger.info("Team exists: %s", name)
                    continue
                team = await repo.create(name)
                logger.info("Created team %s (%s)", team.name, team.id)
                created += 1
    logger.info("Seeded %d of %d predefined teams", created, len(PREDEFINED_TEAMS))
    return created


def main() -> None:
    asyncio.run(run())


if __name__ == "__main__":
    main()
