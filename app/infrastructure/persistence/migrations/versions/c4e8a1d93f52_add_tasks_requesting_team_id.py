"""add tasks.requesting_team_id and backfill from description metadata

Revision ID: c4e8a1d93f52
Revises: 8b2d4e6f1a37
Create Date: 2026-10-19

Assistance requests recorded the requesting team only inside
description_json._metadata. This adds a nullable FK column and copies the
value over where it names an existing team. The metadata is left in place.
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "c4e8a1d93f52"
down_revision: Union[str, Sequence[str], None] = "8b2d4e6f1a37"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.add_column(
        "tasks",
        sa.Column("requesting_team_id", sa.String(length=36), nullable=True),
    )
    op.create_foreign_key(
        "fk_tasks_requesting_team_id_teams",
        "tasks",
        "teams",
        ["requesting_team_id"],
        ["id"],
        ondelete="SET NULL",
    )
    op.create_index(
        "ix_tasks_requesting_team_id", "tasks", ["requesting_team_id"], unique=False
    )
    op.execute(
        """
        UPDATE tasks t
        SET requesting_team_id = tm.id
        FROM teams tm
        WHERE t.requesting_team_id IS NULL
          AND t.is_request
          AND tm.id = t.description_json -> '_metadata' ->> 'requesting_team_id'
        """
    )


def downgrade() -> None:
    op.drop_index("ix_tasks_requesting_team_id", table_name="tasks")
    op.drop_constraint(
        "fk_tasks_requesting_team_id_teams", "tasks", type_="foreignkey"
    )
    op.drop_column("tasks", "requesting_team_id")
