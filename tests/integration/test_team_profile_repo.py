"""Team and profile repository integration tests on in-memory SQLite."""

from sqlalchemy import select

from app.application.dtos.profile import ProfileCreate
from app.domain.enums import TaskPriority, TaskStatus
from app.infrastructure.persistence.models import Task
from app.infrastructure.persistence.repositories import ProfileRepository, TeamRepository


async def test_create_team_and_lookup(db_session) -> None:
    repo = TeamRepository(db_session)
    created = await repo.create("Design Team")
    assert created.id
    assert created.name == "Design Team"
    assert created.created_at is not None

    assert (await repo.get_by_id(created.id)).name == "Design Team"
    assert (await repo.get_by_name("Design Team")).id == created.id
    assert await repo.get_by_name("design team") is None


async def test_list_teams_ordered_by_name(db_session) -> None:
    repo = TeamRepository(db_session)
    for name in ("Sales Team", "HR Team", "IT Team"):
        await repo.create(name)
    assert [t.name for t in await repo.list_teams()] == ["HR Team", "IT Team", "Sales Team"]


async def test_find_by_name_fragment_is_case_insensitive(db_session) -> None:
    repo = TeamRepository(db_session)
    await repo.create("Sales Team")
    await repo.create("Presales Support")
    # first match by name
    assert (await repo.find_by_name_fragment("sales")).name == "Presales Support"
    assert (await repo.find_by_name_fragment("SALES T")).name == "Sales Team"
    assert await repo.find_by_name_fragment("Legal") is None


async def test_delete_team(db_session) -> None:
    repo = TeamRepository(db_session)
    created = await repo.create("Temp Team")
    assert await repo.delete(created.id) is True
    assert await repo.get_by_id(created.id) is None
    assert await repo.delete(created.id) is False


async def test_profile_create_update_list(db_session) -> None:
    repo = ProfileRepository(db_session)
    created = await repo.create(
        ProfileCreate(id="u-1", full_name="Ada", department="IT")
    )
    assert created.role == "member"
    assert created.permissions.can_create_tasks
    await repo.create(ProfileCreate(id="u-2", full_name="Brian", role="admin"))

    updated = await repo.update("u-1", {"title": "Lead", "id": "hijack"})
    assert updated.id == "u-1"
    assert updated.title == "Lead"
    assert await repo.update("missing", {"title": "x"}) is None

    assert [p.full_name for p in await repo.list_profiles()] == ["Ada", "Brian"]
    assert (await repo.get_by_id("u-2")).user_role.value == "admin"
    assert await repo.get_by_id("nobody") is None


async def test_profile_delete_releases_tasks(db_session) -> None:
    repo = ProfileRepository(db_session)
    await repo.create(ProfileCreate(id="a-1", full_name="Admin", role="admin"))
    await repo.create(ProfileCreate(id="u-1", full_name="Leaving"))
    db_session.add_all(
        [
            Task(
                id="made",
                title="Made by leaver",
                status=TaskStatus.TODO,
                priority=TaskPriority.LOW,
                created_by="u-1",
            ),
            Task(
                id="held",
                title="Assigned to leaver",
                status=TaskStatus.IN_PROGRESS,
                priority=TaskPriority.LOW,
                created_by="a-1",
                assignee_id="u-1",
            ),
        ]
    )
    await db_session.flush()
    assert await repo.count_by_role("admin") == 1

    assert await repo.delete("u-1", transfer_tasks_to="a-1") is True

    db_session.expire_all()
    tasks = {
        t.id: t for t in (await db_session.execute(select(Task))).scalars().all()
    }
    assert tasks["made"].created_by == "a-1"
    assert tasks["held"].assignee_id is None
    assert await repo.get_by_id("u-1") is None
    assert await repo.delete("u-1", transfer_tasks_to="a-1") is False
