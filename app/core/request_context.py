"""Per-request context: authenticated user (for RLS) and request ID (for logs).

The auth dependency sets the caller's identity (JWT sub) once the bearer
token is verified, so that get_db / get_db_transactional can run
SET LOCAL app.current_user_id on the session. RLS policies then restrict
rows to what that user may see or change.

RequestIDMiddleware sets the request ID; the logging filter adds it to
every record emitted while the request is handled.
"""

from contextvars import ContextVar

current_user_id: ContextVar[str | None] = ContextVar("current_user_id", default=None)
current_request_id: ContextVar[str | None] = ContextVar(
    "current_request_id", default=None
)


def set_user_id(user_id: str | None) -> None:
    """Set the current user ID for this context (e.g. request)."""
    current_user_id.set(user_id)


def get_user_id() -> str | None:
    """Return the current user ID if set."""
    return current_user_id.get()


def set_request_id(request_id: str | None) -> None:
    current_request_id.set(request_id)


def get_request_id() -> str | None:
    return current_request_id.get()
