"""Give assistance requests without a requesting team a default one.

Usage:
    python -m scripts.backfill_request_metadata [--dry-run]

For request-flagged tasks whose requesting_team_id column is empty: use the
team already named in description_json._metadata when there is one,
otherwise the team called DEFAULT_REQUESTING_TEAM_NAME (default "IT Team").
Both the column and the metadata are written.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from app.application.dtos.task import TaskResult
from app.application.use_cases.tasks import requesting_team_id_of
from app.core.config import get_settings
from app.domain.value_objects import AssistanceRequestMetadata
from app.infrastructure.persistence.repositories.task_repo import TaskRepository
from app.infrastructure.persistence.repositories.team_repo import TeamRepository
from scripts._db import prepare

logger = logging.getLogger("scripts.backfill_request_metadata")


def backfill_changes(task: TaskResult, default_team_id: str) -> dict:
    """Return the column changes that give task a requesting team."""
    requesting = requesting_team_id_of(task) or default_team_id
    existing = AssistanceRequestMetadata.from_description(task.description_json)
    target = (existing.target_team_id if existing else None) or task.team_id
    metadata = AssistanceRequestMetadata(
        requesting_team_id=requesting, target_team_id=target
    )
    return {
        "requesting_team_id": requesting,
        "description_json": metadata.merge_into(task.description_json),
    }


async def run(dry_run: bool) -> int:
    session_factory = prepare()
    team_name = get_settings().default_requesting_team_name
    async with session_factory() as session:
        async with session.begin():
            default_team = await TeamRepository(session).get_by_name(team_name)
            if default_team is None:
                logger.error("Default requesting team not found: %s", team_name)
                sys.exit(1)
            task_repo = TaskRepository(session)
            tasks = await task_repo.list_requests_missing_requesting_team()
            logger.info("Found %d requests without a requesting team", len(tasks))
            for task in tasks:
                changes = backfill_changes(task, default_team.id)
                if dry_run:
                    logger.info(
                        "Would set %s requesting_team_id=%s",
                        task.id,
                        changes["requesting_team_id"],
                    )
                    continue
                await task_repo.update(task.id, changes)
                logger.info(
                    "Set %s requesting_team_id=%s", task.id, changes["requesting_team_id"]
                )
    return len(tasks)


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--dry-run", action="store_true", help="report only")
    args = parser.parse_args()
    asyncio.run(run(args.dry_run))


if __name__ == "__main__":
    main()
