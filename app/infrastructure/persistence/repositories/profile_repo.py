"""Profile repository. Read methods return ProfileResult (DTO)."""

from __future__ import annotations

from typing import Any

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.profile import ProfileCreate, ProfileResult
from app.domain.exceptions import DuplicateResourceException
from app.infrastructure.persistence.models.profile import Profile
from app.infrastructure.persistence.models.task import Task
from app.infrastructure.persistence.repositories.base import (
    BaseRepository,
    store_errors,
)

UPDATABLE_COLUMNS = frozenset({"full_name", "role", "department", "title", "location"})


def _profile_to_result(p: Profile) -> ProfileResult:
    """Map ORM Profile to application ProfileResult."""
    return ProfileResult(
        id=p.id,
        full_name=p.full_name,
        role=p.role,
        department=p.department,
        title=p.title,
        location=p.location,
        created_at=p.created_at,
        updated_at=p.updated_at,
    )


class ProfileRepository(BaseRepository[Profile]):
    """Profile repository. Implements IProfileRepository."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Profile)

    async def get_by_id(self, profile_id: str) -> ProfileResult | None:
        with store_errors("fetch profile"):
            profile = await self.get_model(profile_id)
        return _profile_to_result(profile) if profile else None

    async def create(self, data: ProfileCreate) -> ProfileResult:
        """Insert a profile; raises DuplicateResourceException if the id exists."""
        profile = Profile(
            id=data.id,
            full_name=data.full_name,
            role=data.role,
            department=data.department,
            title=data.title,
            location=data.location,
        )
        with store_errors("create profile"):
            try:
                async with self.db.begin_nested():
                    await self.add(profile)
            except IntegrityError as exc:
                raise DuplicateResourceException("profile", "id", data.id) from exc
            await self.db.refresh(profile)
        return _profile_to_result(profile)

    async def update(
        self, profile_id: str, changes: dict[str, Any]
    ) -> ProfileResult | None:
        """Apply column changes; None if the profile does not exist."""
        with store_errors("update profile"):
            profile = await self.get_model(profile_id)
            if profile is None:
                return None
            for key, value in changes.items():
                if key in UPDATABLE_COLUMNS:
                    setattr(profile, key, value)
            await self.db.flush()
            await self.db.refresh(profile)
        return _profile_to_result(profile)

    async def list_profiles(self) -> list[ProfileResult]:
        """Return all profiles ordered by full name."""
        with store_errors("fetch profiles"):
            result = await self.db.execute(
                select(Profile).order_by(Profile.full_name, Profile.id)
            )
            return [_profile_to_result(p) for p in result.scalars().all()]

    async def count_by_role(self, role: str) -> int:
        with store_errors("count profiles"):
            result = await self.db.execute(
                select(func.count()).select_from(Profile).where(Profile.role == role)
            )
            return int(result.scalar_one())

    async def delete(self, profile_id: str, transfer_tasks_to: str) -> bool:
        """Delete a profile; return False if it did not exist.

        Tasks assigned to the profile become unassigned and tasks it created
        are handed to transfer_tasks_to, since created_by is required.
        """
        with store_errors("delete profile"):
            await self.db.execute(
                update(Task).where(Task.assignee_id == profile_id).values(assignee_id=None)
            )
            await self.db.execute(
                update(Task)
                .where(Task.created_by == profile_id)
                .values(created_by=transfer_tasks_to)
            )
            result = await self.db.execute(delete(Profile).where(Profile.id == profile_id))
        return (result.rowcount or 0) > 0
