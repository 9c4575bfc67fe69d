"""add blocked, on_hold, cancelled to task_status

Revision ID: 8b2d4e6f1a37
Revises: 3f1a9c2e7b10
Create Date: 2026-10-19

ALTER TYPE ... ADD VALUE cannot run inside a transaction block on older
Postgres releases, so it runs in an autocommit block. Additive only: the
new labels can be used as soon as this revision is applied, with no
table rewrite.
"""

from typing import Sequence, Union

from alembic import op

revision: str = "8b2d4e6f1a37"
down_revision: Union[str, Sequence[str], None] = "3f1a9c2e7b10"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

LATE_TASK_STATUSES = ("blocked", "on_hold", "cancelled")


def upgrade() -> None:
    with op.get_context().autocommit_block():
        for value in LATE_TASK_STATUSES:
            op.execute(f"ALTER TYPE task_status ADD VALUE IF NOT EXISTS '{value}'")


def downgrade() -> None:
    # Postgres cannot drop enum labels; move rows off them so older code can read every row.
    op.execute(
        "UPDATE tasks SET status = 'todo' "
        "WHERE status::text IN ('blocked', 'on_hold', 'cancelled')"
    )
