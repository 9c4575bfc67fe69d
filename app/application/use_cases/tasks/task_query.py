"""Parse raw task-list query parameters into TaskFilters.

Every parameter arrives as an optional string. An empty or missing value
means "no filter" (or the default); anything else must be valid, and an
invalid value raises ValidationException naming the parameter.
"""

from __future__ import annotations

from enum import Enum
from typing import TypeVar

from app.application.dtos.task import TaskFilters
from app.domain.enums import SortOrder, TaskPriority, TaskSortField, TaskStatus
from app.domain.exceptions import ValidationException

_TRUE_VALUES = frozenset({"true", "1", "yes"})
_FALSE_VALUES = frozenset({"false", "0", "no"})

E = TypeVar("E", bound=Enum)


def _blank(value: str | None) -> bool:
    return value is None or not value.strip()


def _parse_enum_set(
    raw: str | None, enum_cls: type[E], field: str
) -> tuple[E, ...]:
    """Parse 'a,b,c' into enum members (order kept, duplicates dropped)."""
    if _blank(raw):
        return ()
    members: list[E] = []
    for part in raw.split(","):
        value = part.strip()
        if not value:
            continue
        try:
            member = enum_cls(value)
        except ValueError:
            raise ValidationException(
                f"Invalid {field} value '{value}'; expected one of: "
                + ", ".join(m.value for m in enum_cls),
                field=field,
            ) from None
        if member not in members:
            members.append(member)
    return tuple(members)


def parse_bool(raw: str | None, field: str) -> bool | None:
    """Parse a boolean query value; None when blank."""
    if _blank(raw):
        return None
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValidationException(f"Invalid {field} value '{raw}'; expected true or false", field=field)


def _parse_positive_int(raw: str | None, field: str, default: int) -> int:
    if _blank(raw):
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        raise ValidationException(f"{field} must be an integer", field=field) from None
    if value < 1:
        raise ValidationException(f"{field} must be >= 1", field=field)
    return value


def _optional_text(raw: str | None) -> str | None:
    return None if _blank(raw) else raw.strip()


def parse_task_filters(
    *,
    status: str | None = None,
    priority: str | None = None,
    assignee_id: str | None = None,
    team_id: str | None = None,
    is_request: str | None = None,
    search: str | None = None,
    sort_field: str | None = None,
    sort_order: str | None = None,
    page: str | None = None,
    limit: str | None = None,
    default_limit: int = 20,
    max_limit: int = 100,
) -> TaskFilters:
    """Build TaskFilters from raw query strings (see module docstring)."""
    field = TaskSortField.CREATED_AT
    if not _blank(sort_field):
        try:
            field = TaskSortField(sort_field.strip())
        except ValueError:
            raise ValidationException(
                f"Invalid sort_field '{sort_field}'; expected one of: "
                + ", ".join(TaskSortField.values()),
                field="sort_field",
            ) from None
    order = SortOrder.DESC
    if not _blank(sort_order):
        try:
            order = SortOrder(sort_order.strip().lower())
        except ValueError:
            raise ValidationException(
                f"Invalid sort_order '{sort_order}'; expected asc or desc",
                field="sort_order",
            ) from None

    page_number = _parse_positive_int(page, "page", 1)
    page_size = _parse_positive_int(limit, "limit", default_limit)
    if page_size > max_limit:
        raise ValidationException(f"limit must be <= {max_limit}", field="limit")

    return TaskFilters(
        statuses=_parse_enum_set(status, TaskStatus, "status"),
        priorities=_parse_enum_set(priority, TaskPriority, "priority"),
        assignee_id=_optional_text(assignee_id),
        team_id=_optional_text(team_id),
        is_request=parse_bool(is_request, "is_request"),
        search=_optional_text(search),
        sort_field=field,
        sort_order=order,
        page=page_number,
        limit=page_size,
    )
