"""Domain enumerations for task tracking.

Enums represent fixed sets of domain values (task status, priority, role).
Values are the strings persisted in the database and exchanged over the API.
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class TaskStatus(_ValuesMixin, str, Enum):
    """Task lifecycle status (Postgres enum type task_status).

    BLOCKED, ON_HOLD and CANCELLED were added to the database type by a later
    additive migration; a database that has not run it rejects them.
    """

    TODO = "todo"
    IN_PROGRESS = "in_progress"
    DONE = "done"
    AWAITING_APPROVAL = "awaiting_approval"
    PENDING_REVIEW = "pending_review"
    APPROVED = "approved"
    BLOCKED = "blocked"
    ON_HOLD = "on_hold"
    CANCELLED = "cancelled"

    @classmethod
    def late_values(cls) -> list[str]:
        """Values that require the add_late_task_statuses migration."""
        return [cls.BLOCKED.value, cls.ON_HOLD.value, cls.CANCELLED.value]


class TaskPriority(_ValuesMixin, str, Enum):
    """Task priority, ordered low < medium < high < urgent."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class UserRole(_ValuesMixin, str, Enum):
    """Application role stored on the profile."""

    MEMBER = "member"
    ADMIN = "admin"


class SortOrder(_ValuesMixin, str, Enum):
    """Sort direction for task listing."""

    ASC = "asc"
    DESC = "desc"


class TaskSortField(_ValuesMixin, str, Enum):
    """Task columns that may be used for sorting."""

    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"
    DUE_DATE = "due_date"
    TITLE = "title"
    STATUS = "status"
    PRIORITY = "priority"
