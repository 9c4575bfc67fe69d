"""Unit tests for ProfileService (first-access creation, self-edit, roles, removal)."""

from unittest.mock import AsyncMock

import pytest

from app.application.dtos.profile import ProfileCreate, ProfileResult, TokenIdentity
from app.application.dtos.team import TeamResult
from app.application.services import ProfileService, team_for_department
from app.domain.enums import UserRole
from app.domain.exceptions import (
    AuthorizationException,
    DuplicateResourceException,
    ResourceNotFoundException,
    ValidationException,
)


def _from_create(data: ProfileCreate) -> ProfileResult:
    return ProfileResult(
        id=data.id,
        full_name=data.full_name,
        role=data.role,
        department=data.department,
        title=data.title,
        location=data.location,
    )


@pytest.fixture
def profile_service():
    profile_repo = AsyncMock()
    profile_repo.get_by_id.return_value = None
    profile_repo.create.side_effect = _from_create
    team_repo = AsyncMock()
    return ProfileService(profile_repo, team_repo), profile_repo, team_repo


async def test_ensure_profile_returns_existing(profile_service) -> None:
    svc, profile_repo, _ = profile_service
    existing = ProfileResult(id="u-1", full_name="Ada", role="admin")
    profile_repo.get_by_id.return_value = existing
    assert await svc.ensure_profile(TokenIdentity(user_id="u-1")) == existing
    profile_repo.create.assert_not_called()


async def test_ensure_profile_creates_member_from_metadata(profile_service) -> None:
    svc, profile_repo, _ = profile_service
    identity = TokenIdentity(
        user_id="u-2",
        email="grace@example.com",
        user_metadata={"full_name": " Grace ", "department": "Sales", "role": "admin"},
    )
    profile = await svc.ensure_profile(identity)
    assert profile.id == "u-2"
    assert profile.full_name == "Grace"
    assert profile.department == "Sales"
    # role in token metadata is not trusted
    assert profile.user_role == UserRole.MEMBER


async def test_ensure_profile_defaults_full_name(profile_service) -> None:
    svc, _, _ = profile_service
    profile = await svc.ensure_profile(TokenIdentity(user_id="u-3"))
    assert profile.full_name == "User"


async def test_ensure_profile_concurrent_create_refetches(profile_service) -> None:
    svc, profile_repo, _ = profile_service
    winner = ProfileResult(id="u-4", full_name="Winner", role="member")
    profile_repo.get_by_id.side_effect = [None, winner]
    profile_repo.create.side_effect = DuplicateResourceException("profile", "id", "u-4")
    assert await svc.ensure_profile(TokenIdentity(user_id="u-4")) == winner


async def test_update_me_rejects_role(profile_service) -> None:
    svc, profile_repo, _ = profile_service
    with pytest.raises(ValidationException) as exc_info:
        await svc.update_me("u-1", {"role": "admin"})
    assert exc_info.value.details == {"field": "role"}
    profile_repo.update.assert_not_called()


async def test_update_me_rejects_empty_name(profile_service) -> None:
    svc, _, _ = profile_service
    with pytest.raises(ValidationException):
        await svc.update_me("u-1", {"full_name": "  "})


async def test_update_me_not_found(profile_service) -> None:
    svc, profile_repo, _ = profile_service
    profile_repo.update.return_value = None
    with pytest.raises(ResourceNotFoundException):
        await svc.update_me("u-1", {"title": "Lead"})


async def test_set_role_requires_manage_users(profile_service) -> None:
    svc, profile_repo, _ = profile_service
    member = ProfileResult(id="u-1", full_name="M", role="member")
    with pytest.raises(AuthorizationException):
        await svc.set_role(member, "u-2", UserRole.ADMIN)
    profile_repo.update.assert_not_called()


async def test_set_role_by_admin(profile_service) -> None:
    svc, profile_repo, _ = profile_service
    admin = ProfileResult(id="a-1", full_name="A", role="admin")
    promoted = ProfileResult(id="u-2", full_name="B", role="admin")
    profile_repo.update.return_value = promoted
    assert await svc.set_role(admin, "u-2", UserRole.ADMIN) == promoted
    profile_repo.update.assert_awaited_once_with("u-2", {"role": "admin"})



async def test_delete_profile_requires_manage_users(profile_service) -> None:
    svc, profile_repo, _ = profile_service
    member = ProfileResult(id="u-1", full_name="M", role="member")
    with pytest.raises(AuthorizationException):
        await svc.delete_profile(member, "u-2")
    profile_repo.delete.assert_not_called()


async def test_delete_own_profile_is_rejected(profile_service) -> None:
    svc, profile_repo, _ = profile_service
    admin = ProfileResult(id="a-1", full_name="A", role="admin")
    with pytest.raises(ValidationException):
        await svc.delete_profile(admin, "a-1")
    profile_repo.delete.assert_not_called()


async def test_delete_missing_profile(profile_service) -> None:
    svc, _, _ = profile_service
    admin = ProfileResult(id="a-1", full_name="A", role="admin")
    with pytest.raises(ResourceNotFoundException):
        await svc.delete_profile(admin, "ghost")


async def test_delete_last_admin_is_rejected(profile_service) -> None:
    svc, profile_repo, _ = profile_service
    manager = ProfileResult(id="a-1", full_name="A", role="admin")
    profile_repo.get_by_id.return_value = ProfileResult(id="a-2", full_name="B", role="admin")
    profile_repo.count_by_role.return_value = 1
    with pytest.raises(ValidationException, match="last admin"):
        await svc.delete_profile(manager, "a-2")
    profile_repo.count_by_role.assert_awaited_once_with("admin")
    profile_repo.delete.assert_not_called()


async def test_delete_profile_hands_tasks_to_actor(profile_service) -> None:
    svc, profile_repo, _ = profile_service
    admin = ProfileResult(id="a-1", full_name="A", role="admin")
    profile_repo.get_by_id.return_value = ProfileResult(id="u-2", full_name="B", role="member")
    profile_repo.delete.return_value = True
    await svc.delete_profile(admin, "u-2")
    profile_repo.count_by_role.assert_not_called()
    profile_repo.delete.assert_awaited_once_with("u-2", transfer_tasks_to="a-1")

async def test_team_for_department() -> None:
    team_repo = AsyncMock()
    team_repo.find_by_name_fragment.return_value = TeamResult(id="s", name="Sales Team")
    assert (await team_for_department(team_repo, " Sales ")).id == "s"
    team_repo.find_by_name_fragment.assert_awaited_once_with("Sales")


@pytest.mark.parametrize("department", [None, "", "   "])
async def test_team_for_department_blank(department) -> None:
    team_repo = AsyncMock()
    assert await team_for_department(team_repo, department) is None
    team_repo.find_by_name_fragment.assert_not_called()
