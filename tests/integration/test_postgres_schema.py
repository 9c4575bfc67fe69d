"""Checks against a migrated Postgres database. Skipped when DATABASE_URL is not set."""

import pytest
from sqlalchemy import text

from app.infrastructure.persistence.database import ping_database
from scripts.check_task_status_enum import ENUM_LABELS_SQL, missing_statuses


@pytest.mark.requires_db
async def test_task_status_enum_is_complete(pg_session) -> None:
    labels = list((await pg_session.execute(ENUM_LABELS_SQL)).scalars().all())
    assert labels, "task_status enum missing; run alembic upgrade head"
    assert missing_statuses(labels) == []


@pytest.mark.requires_db
async def test_rls_enabled_on_tasks_and_profiles(pg_session) -> None:
    rows = await pg_session.execute(
        text(
            "SELECT relname FROM pg_class "
            "WHERE relname IN ('tasks', 'profiles') AND relrowsecurity"
        )
    )
    assert set(rows.scalars().all()) == {"tasks", "profiles"}


@pytest.mark.requires_db
async def test_ping_database(pg_session) -> None:
    await ping_database()
