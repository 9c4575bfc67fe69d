"""Tests for parsing task-list query parameters."""

import pytest

from app.application.use_cases.tasks import parse_bool, parse_task_filters
from app.domain.enums import SortOrder, TaskPriority, TaskSortField, TaskStatus
from app.domain.exceptions import ValidationException


def test_defaults_when_nothing_given() -> None:
    filters = parse_task_filters()
    assert filters.statuses == ()
    assert filters.priorities == ()
    assert filters.is_request is None
    assert filters.search is None
    assert filters.sort_field == TaskSortField.CREATED_AT
    assert filters.sort_order == SortOrder.DESC
    assert filters.page == 1
    assert filters.limit == 20
    assert filters.offset == 0


def test_blank_values_mean_no_filter() -> None:
    filters = parse_task_filters(
        status="", priority="  ", team_id="", search="   ", is_request="", page="", limit=""
    )
    assert filters.statuses == ()
    assert filters.priorities == ()
    assert filters.team_id is None
    assert filters.search is None
    assert filters.is_request is None
    assert filters.page == 1


def test_comma_separated_sets() -> None:
    filters = parse_task_filters(status="todo, in_progress,todo", priority="high,urgent")
    assert filters.statuses == (TaskStatus.TODO, TaskStatus.IN_PROGRESS)
    assert filters.priorities == (TaskPriority.HIGH, TaskPriority.URGENT)


def test_page_and_limit_give_offset() -> None:
    filters = parse_task_filters(page="2", limit="10")
    assert (filters.page, filters.limit, filters.offset) == (2, 10, 10)


@pytest.mark.parametrize(
    ("kwargs", "field"),
    [
        ({"status": "todo,finished"}, "status"),
        ({"priority": "critical"}, "priority"),
        ({"sort_field": "assignee"}, "sort_field"),
        ({"sort_order": "sideways"}, "sort_order"),
        ({"page": "0"}, "page"),
        ({"page": "two"}, "page"),
        ({"limit": "-5"}, "limit"),
        ({"is_request": "maybe"}, "is_request"),
    ],
)
def test_invalid_values_raise_validation_error(kwargs, field) -> None:
    with pytest.raises(ValidationException) as exc_info:
        parse_task_filters(**kwargs)
    assert exc_info.value.details == {"field": field}


def test_limit_above_max_is_rejected() -> None:
    with pytest.raises(ValidationException) as exc_info:
        parse_task_filters(limit="101", max_limit=100)
    assert exc_info.value.details == {"field": "limit"}


def test_sort_order_is_case_insensitive() -> None:
    assert parse_task_filters(sort_order="ASC").sort_order == SortOrder.ASC


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("true", True), ("1", True), ("Yes", True), ("false", False), ("0", False), (None, None)],
)
def test_parse_bool(raw, expected) -> None:
    assert parse_bool(raw, "is_request") is expected
