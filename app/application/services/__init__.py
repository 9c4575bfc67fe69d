"""Application services."""

from app.application.services.profile_service import (
    ProfileService,
    team_for_department,
)

__all__ = ["ProfileService", "team_for_department"]
