"""Tests for domain and store exceptions (error_code, message, details)."""

from sqlalchemy.exc import DBAPIError, OperationalError

from app.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    DuplicateResourceException,
    ResourceNotFoundException,
    SqlNotConfiguredException,
    TaskTrackException,
    ValidationException,
)
from app.infrastructure.exceptions import (
    StatusNotSupportedException,
    StoreException,
    translate_store_error,
)


class _PgError(Exception):
    def __init__(self, message: str, sqlstate: str | None = None) -> None:
        super().__init__(message)
        self.sqlstate = sqlstate


def test_base_exception_default_error_code() -> None:
    exc = TaskTrackException("Something failed")
    assert exc.message == "Something failed"
    assert exc.error_code == "TaskTrackException"
    assert exc.details == {}


def test_to_dict_shape() -> None:
    exc = ValidationException("title is required", field="title")
    assert exc.to_dict() == {
        "error": "VALIDATION_ERROR",
        "message": "title is required",
        "details": {"field": "title"},
    }


def test_validation_exception_without_field() -> None:
    assert ValidationException("bad").details == {}


def test_authentication_exception() -> None:
    exc = AuthenticationException()
    assert exc.error_code == "AUTHENTICATION_ERROR"
    assert exc.message == "Authentication failed"


def test_authorization_exception_with_resource_and_action() -> None:
    exc = AuthorizationException("task", "delete")
    assert exc.error_code == "PERMISSION_DENIED"
    assert exc.message == "Permission denied: delete on task"
    assert exc.details == {"resource": "task", "action": "delete"}


def test_resource_not_found() -> None:
    exc = ResourceNotFoundException("task", "t-1")
    assert exc.error_code == "RESOURCE_NOT_FOUND"
    assert exc.details == {"resource_type": "task", "resource_id": "t-1"}


def test_duplicate_resource() -> None:
    exc = DuplicateResourceException("team", "name", "IT Team")
    assert exc.error_code == "DUPLICATE_RESOURCE"
    assert "IT Team" in exc.message


def test_sql_not_configured() -> None:
    assert SqlNotConfiguredException().error_code == "SERVICE_UNAVAILABLE"


def test_translate_enum_rejection_to_status_not_supported() -> None:
    orig = _PgError('invalid input value for enum task_status: "cancelled"', "22P02")
    exc = translate_store_error(DBAPIError("UPDATE tasks", {}, orig), "update task")
    assert isinstance(exc, StatusNotSupportedException)
    assert exc.error_code == "STATUS_NOT_SUPPORTED"
    assert exc.details["operation"] == "update task"
    assert "cancelled" in exc.details["reason"]


def test_translate_other_errors_to_store_exception() -> None:
    orig = _PgError("connection refused")
    exc = translate_store_error(OperationalError("SELECT 1", {}, orig), "fetch tasks")
    assert type(exc) is StoreException
    assert exc.error_code == "STORE_ERROR"
    assert exc.message == "Failed to fetch tasks"
    assert isinstance(exc, TaskTrackException)
