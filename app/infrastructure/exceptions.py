"""Infrastructure exceptions for store operations.

Store errors extend TaskTrackException so presentation can map them
to HTTP responses consistently.
"""

from sqlalchemy.exc import DBAPIError, SQLAlchemyError

from app.domain.exceptions import TaskTrackException

# SQLSTATE raised by Postgres for "invalid input value for enum ..."
_INVALID_TEXT_REPRESENTATION = "22P02"


class StoreException(TaskTrackException):
    """Any failure reported by the database while reading or writing."""

    def __init__(
        self,
        operation: str,
        reason: str,
        error_code: str = "STORE_ERROR",
    ) -> None:
        super().__init__(
            f"Failed to {operation}",
            error_code,
            {"operation": operation, "reason": reason},
        )


class StatusNotSupportedException(StoreException):
    """The database enum does not (yet) accept a status or priority value.

    Raised for values such as 'cancelled' against a database that has not run
    the additive enum migration.
    """

    def __init__(self, operation: str, reason: str) -> None:
        super().__init__(operation, reason, "STATUS_NOT_SUPPORTED")


def _sqlstate(exc: DBAPIError) -> str | None:
    """Return the SQLSTATE of the driver error, if the driver exposes one."""
    orig = exc.orig
    for attr in ("sqlstate", "pgcode"):
        value = getattr(orig, attr, None)
        if value:
            return str(value)
    return None


def translate_store_error(exc: SQLAlchemyError, operation: str) -> StoreException:
    """Map a SQLAlchemy error to StoreException (or StatusNotSupportedException)."""
    reason = str(getattr(exc, "orig", None) or exc)
    if isinstance(exc, DBAPIError):
        enum_rejected = "invalid input value for enum" in reason
        if enum_rejected or (
            _sqlstate(exc) == _INVALID_TEXT_REPRESENTATION and "enum" in reason
        ):
            return StatusNotSupportedException(operation, reason)
    return StoreException(operation, reason)
