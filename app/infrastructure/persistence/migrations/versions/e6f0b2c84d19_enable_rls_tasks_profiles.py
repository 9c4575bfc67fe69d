"""enable RLS on tasks and profiles

Revision ID: e6f0b2c84d19
Revises: c4e8a1d93f52
Create Date: 2026-10-19

Policies key on current_setting('app.current_user_id', true), which the
application sets with SET LOCAL at the start of each request session.
Any authenticated session may read; tasks may be changed by their
creator, their assignee or an admin; profiles by their owner or an admin.
Migrations and maintenance scripts should use a DB role with BYPASSRLS;
the app role must not.
"""

from typing import Sequence, Union

from alembic import op

revision: str = "e6f0b2c84d19"
down_revision: Union[str, Sequence[str], None] = "c4e8a1d93f52"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

CURRENT_USER = "current_setting('app.current_user_id', true)"
AUTHENTICATED = f"coalesce({CURRENT_USER}, '') <> ''"
IS_ADMIN = "app_current_user_is_admin()"

POLICIES: list[tuple[str, str, str]] = [
    ("profiles", "profiles_read", f"FOR SELECT USING ({AUTHENTICATED})"),
    ("profiles", "profiles_self_insert", f"FOR INSERT WITH CHECK (id = {CURRENT_USER})"),
    (
        "profiles",
        "profiles_update",
        f"FOR UPDATE USING (id = {CURRENT_USER} OR {IS_ADMIN})",
    ),
    ("tasks", "tasks_read", f"FOR SELECT USING ({AUTHENTICATED})"),
    (
        "tasks",
        "tasks_insert",
        f"FOR INSERT WITH CHECK (created_by = {CURRENT_USER})",
    ),
    (
        "tasks",
        "tasks_update",
        f"FOR UPDATE USING (created_by = {CURRENT_USER} "
        f"OR assignee_id = {CURRENT_USER} OR {IS_ADMIN})",
    ),
    (
        "tasks",
        "tasks_delete",
        f"FOR DELETE USING (created_by = {CURRENT_USER} "
        f"OR assignee_id = {CURRENT_USER} OR {IS_ADMIN})",
    ),
]


def upgrade() -> None:
    # SECURITY DEFINER so the admin lookup on profiles is not itself filtered by RLS.
    op.execute(
        f"""
        CREATE OR REPLACE FUNCTION app_current_user_is_admin() RETURNS boolean
        LANGUAGE sql STABLE SECURITY DEFINER SET search_path = public AS $$
            SELECT EXISTS (
                SELECT 1 FROM profiles
                WHERE id = {CURRENT_USER} AND role = 'admin'
            )
        $$
        """
    )
    for table in ("profiles", "tasks"):
        op.execute(f"ALTER TABLE {table} ENABLE ROW LEVEL SECURITY")
    for table, name, clause in POLICIES:
        op.execute(f"CREATE POLICY {name} ON {table} {clause}")


def downgrade() -> None:
    for table, name, _ in reversed(POLICIES):
        op.execute(f"DROP POLICY IF EXISTS {name} ON {table}")
    for table in ("tasks", "profiles"):
        op.execute(f"ALTER TABLE {table} DISABLE ROW LEVEL SECURITY")
    op.execute("DROP FUNCTION IF EXISTS app_current_user_is_admin()")
