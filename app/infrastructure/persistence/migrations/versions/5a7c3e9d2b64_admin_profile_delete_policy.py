"""allow admins to delete other profiles

Revision ID: 5a7c3e9d2b64
Revises: e6f0b2c84d19
Create Date: 2026-10-19

Profiles had no DELETE policy, so RLS refused every delete. Admins may
now remove any profile except their own.
"""

from typing import Sequence, Union

from alembic import op

revision: str = "5a7c3e9d2b64"
down_revision: Union[str, Sequence[str], None] = "e6f0b2c84d19"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute(
        "CREATE POLICY profiles_admin_delete ON profiles FOR DELETE USING ("
        "app_current_user_is_admin() "
        "AND id <> current_setting('app.current_user_id', true))"
    )


def downgrade() -> None:
    op.execute("DROP POLICY IF EXISTS profiles_admin_delete ON profiles")
