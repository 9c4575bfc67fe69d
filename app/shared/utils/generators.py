"""ID generators for primary keys."""

import uuid


def generate_id() -> str:
    """Return a new random UUID (v4) string for team and task primary keys.

    Profile ids are not generated: they equal the auth identity (JWT sub).
    """
    return str(uuid.uuid4())
