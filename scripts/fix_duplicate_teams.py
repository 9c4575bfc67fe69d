"""Merge teams that share a name: keep the oldest, move tasks, delete the rest.

Usage:
    python -m scripts.fix_duplicate_teams [--dry-run]

--dry-run prints the merge plan without changing anything. Only databases
created before the unique constraint on teams.name can contain duplicates.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
from dataclasses import dataclass

from app.application.dtos.team import TeamResult
from app.infrastructure.persistence.repositories.task_repo import TaskRepository
from app.infrastructure.persistence.repositories.team_repo import TeamRepository
from scripts._db import prepare

logger = logging.getLogger("scripts.fix_duplicate_teams")


@dataclass(frozen=True)
class TeamMerge:
    """Duplicates folded into keep."""

    keep: TeamResult
    duplicates: tuple[TeamResult, ...]


def plan_duplicate_merges(teams_oldest_first: list[TeamResult]) -> list[TeamMerge]:
    """Group teams by exact name; the first (oldest) of each group is kept.

    Input must be ordered oldest first. Names without duplicates produce no merge.
    """
    groups: dict[str, list[TeamResult]] = {}
    for team in teams_oldest_first:
        groups.setdefault(team.name, []).append(team)
    return [
        TeamMerge(keep=members[0], duplicates=tuple(members[1:]))
        for members in groups.values()
        if len(members) > 1
    ]


async def run(dry_run: bool) -> list[TeamMerge]:
    session_factory = prepare()
    async with session_factory() as session:
        async with session.begin():
            team_repo = TeamRepository(session)
            task_repo = TaskRepository(session)
            teams = await team_repo.list_teams_oldest_first()
            merges = plan_duplicate_merges(teams)
            if not merges:
                logger.info("No duplicate teams found (%d teams)", len(teams))
                return merges
            for merge in merges:
                logger.info("Keeping %s (%s)", merge.keep.name, merge.keep.id)
                for dup in merge.duplicates:
                    if dry_run:
                        logger.info("  would merge duplicate %s", dup.id)
                        continue
                    moved = await task_repo.reassign_team(dup.id, merge.keep.id)
                    await team_repo.delete(dup.id)
                    logger.info("  merged duplicate %s (%d tasks moved)", dup.id, moved)
    return merges


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--dry-run", action="store_true", help="print the plan only")
    args = parser.parse_args()
    asyncio.run(run(args.dry_run))


if __name__ == "__main__":
    main()
