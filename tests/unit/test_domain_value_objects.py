"""Tests for roles, permissions and assistance-request metadata."""

import pytest

from app.domain.enums import TaskStatus, UserRole
from app.domain.value_objects import (
    AssistanceRequestMetadata,
    RolePermissions,
    has_role,
    parse_role,
)


def test_parse_role_unknown_or_missing_is_member() -> None:
    assert parse_role("admin") == UserRole.ADMIN
    assert parse_role("superuser") == UserRole.MEMBER
    assert parse_role(None) == UserRole.MEMBER


def test_has_role_uses_rank() -> None:
    assert has_role("admin", UserRole.MEMBER)
    assert has_role("admin", UserRole.ADMIN)
    assert has_role("member", UserRole.MEMBER)
    assert not has_role("member", UserRole.ADMIN)


def test_member_permissions() -> None:
    perms = RolePermissions.for_role("member")
    assert perms.can_create_tasks
    assert not perms.can_access_admin
    assert not perms.can_manage_users
    assert not perms.can_manage_teams
    assert not perms.can_edit_all_tasks
    assert not perms.can_delete_tasks
    assert not perms.can_view_reports


def test_admin_permissions_are_all_true() -> None:
    perms = RolePermissions.for_role(UserRole.ADMIN)
    assert all(vars(perms).values())


def test_metadata_merge_keeps_unrelated_keys() -> None:
    description = {
        "blocks": [{"text": "please help"}],
        "_metadata": {"source": "web", "target_team_id": "old"},
    }
    meta = AssistanceRequestMetadata(requesting_team_id="S", target_team_id="H")
    merged = meta.merge_into(description)
    assert merged["blocks"] == [{"text": "please help"}]
    assert merged["_metadata"] == {
        "source": "web",
        "requesting_team_id": "S",
        "target_team_id": "H",
        "is_assistance_request": True,
    }
    # input is not mutated
    assert description["_metadata"]["target_team_id"] == "old"


def test_metadata_merge_into_none() -> None:
    merged = AssistanceRequestMetadata(None, "H").merge_into(None)
    assert merged == {
        "_metadata": {
            "requesting_team_id": None,
            "target_team_id": "H",
            "is_assistance_request": True,
        }
    }


@pytest.mark.parametrize(
    "description",
    [None, {}, {"_metadata": "broken"}, ["not", "a", "dict"]],
)
def test_metadata_from_description_absent(description) -> None:
    assert AssistanceRequestMetadata.from_description(description) is None


def test_metadata_from_description_empty_strings_are_unknown() -> None:
    meta = AssistanceRequestMetadata.from_description(
        {"_metadata": {"requesting_team_id": "", "target_team_id": "H"}}
    )
    assert meta == AssistanceRequestMetadata(requesting_team_id=None, target_team_id="H")


def test_late_status_values() -> None:
    assert TaskStatus.late_values() == ["blocked", "on_hold", "cancelled"]
