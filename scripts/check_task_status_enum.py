"""Check that the task_status enum in Postgres has every status the app uses.

Usage:
    python -m scripts.check_task_status_enum

Prints the current labels and, for any missing value, the
ALTER TYPE statement that adds it (or run: alembic upgrade head).
Exits 0 when complete, 1 when values are missing.
"""

from __future__ import annotations

import asyncio
import sys

from sqlalchemy import text

from app.domain.enums import TaskStatus
from scripts._db import prepare

ENUM_LABELS_SQL = text(
    "SELECT e.enumlabel FROM pg_enum e "
    "JOIN pg_type t ON t.oid = e.enumtypid "
    "WHERE t.typname = 'task_status' ORDER BY e.enumsortorder"
)


def missing_statuses(labels: list[str]) -> list[str]:
    """Return TaskStatus values absent from labels, in enum order."""
    present = set(labels)
    return [value for value in TaskStatus.values() if value not in present]


def only_late_missing(missing: list[str]) -> bool:
    """True when every missing label comes from the add_late_task_statuses revision."""
    return bool(missing) and set(missing) <= set(TaskStatus.late_values())


def add_value_statements(missing: list[str]) -> list[str]:
    return [
        f"ALTER TYPE task_status ADD VALUE IF NOT EXISTS '{value}';" for value in missing
    ]


async def _main() -> int:
    session_factory = prepare()
    async with session_factory() as session:
        labels = list((await session.execute(ENUM_LABELS_SQL)).scalars().all())
    if not labels:
        print("task_status enum not found. Run: alembic upgrade head", file=sys.stderr)
        return 1
    print("task_status labels: " + ", ".join(labels))
    missing = missing_statuses(labels)
    if not missing:
        print("task_status enum is complete.")
        return 0
    print("Missing values: " + ", ".join(missing), file=sys.stderr)
    if only_late_missing(missing):
        print(
            "Only the late statuses are missing. Run: alembic upgrade head",
            file=sys.stderr,
        )
    for statement in add_value_statements(missing):
        print(statement)
    return 1


def main() -> None:
    sys.exit(asyncio.run(_main()))


if __name__ == "__main__":
    main()
