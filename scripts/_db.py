"""Shared setup for maintenance scripts: .env loading, logging, session factory.

Scripts run outside a request, so no RLS user context is set; point
DATABASE_URL at a role with BYPASSRLS.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from dotenv import load_dotenv
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.domain.exceptions import SqlNotConfiguredException
from app.infrastructure.persistence.database import get_session_factory
from app.shared.logging import setup_logging


def _project_root() -> Path:
    return Path(__file__).resolve().parent.parent


def prepare() -> async_sessionmaker[AsyncSession]:
    """Load .env, configure logging and return the session factory (exit 1 if no DB)."""
    load_dotenv(_project_root() / ".env", override=True)
    setup_logging(logging.INFO)
    try:
        return get_session_factory()
    except SqlNotConfiguredException:
        print(
            "DATABASE_URL not configured. Set it and run: alembic upgrade head",
            file=sys.stderr,
        )
        sys.exit(1)
