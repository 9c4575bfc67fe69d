"""Task ORM model. A unit of work or a cross-team assistance request."""

from datetime import date
from typing import Any

from sqlalchemy import (
    JSON,
    Boolean,
    Date,
    Enum as SAEnum,
    ForeignKey,
    Index,
    String,
    false,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.domain.enums import TaskPriority, TaskStatus
from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import TimestampMixin, UuidMixin


def _enum_values(enum_cls: type) -> list[str]:
    return [member.value for member in enum_cls]


task_status_type = SAEnum(
    TaskStatus,
    name="task_status",
    values_callable=_enum_values,
)
task_priority_type = SAEnum(
    TaskPriority,
    name="task_priority",
    values_callable=_enum_values,
)
json_document_type = JSON(none_as_null=True).with_variant(
    JSONB(none_as_null=True), "postgresql"
)


class Task(UuidMixin, TimestampMixin, Base):
    """Task row. Table: tasks.

    For assistance requests, team_id is the target team and
    requesting_team_id the team that asked for help; the same pair is kept
    in description_json._metadata.
    """

    __tablename__ = "tasks"

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description_json: Mapped[dict[str, Any] | None] = mapped_column(
        json_document_type, nullable=True
    )
    status: Mapped[TaskStatus] = mapped_column(
        task_status_type,
        nullable=False,
        default=TaskStatus.AWAITING_APPROVAL,
        server_default=TaskStatus.AWAITING_APPROVAL.value,
    )
    priority: Mapped[TaskPriority] = mapped_column(
        task_priority_type,
        nullable=False,
        default=TaskPriority.MEDIUM,
        server_default=TaskPriority.MEDIUM.value,
    )
    team_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("teams.id", ondelete="SET NULL"), nullable=True, index=True
    )
    assignee_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("profiles.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    created_by: Mapped[str] = mapped_column(
        String(36), ForeignKey("profiles.id"), nullable=False, index=True
    )
    requesting_team_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("teams.id", ondelete="SET NULL"), nullable=True
    )
    is_request: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false()
    )
    due_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    team = relationship("Team", foreign_keys=[team_id], lazy="raise")
    creator = relationship("Profile", foreign_keys=[created_by], lazy="raise")
    assignee = relationship("Profile", foreign_keys=[assignee_id], lazy="raise")

    __table_args__ = (
        Index("ix_tasks_status", "status"),
        Index("ix_tasks_created_at", "created_at"),
        Index("ix_tasks_team_status", "team_id", "status"),
    )
