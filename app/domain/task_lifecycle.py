"""Task lifecycle rules: initial status on creation and allowed status transitions."""

from app.domain.enums import TaskStatus
from app.domain.exceptions import StatusTransitionException

# Statuses with no entry have no outgoing transitions.
VALID_STATUS_TRANSITIONS: dict[TaskStatus, tuple[TaskStatus, ...]] = {
    TaskStatus.TODO: (
        TaskStatus.IN_PROGRESS,
        TaskStatus.BLOCKED,
        TaskStatus.ON_HOLD,
        TaskStatus.CANCELLED,
    ),
    TaskStatus.AWAITING_APPROVAL: (
        TaskStatus.IN_PROGRESS,
        TaskStatus.APPROVED,
        TaskStatus.CANCELLED,
    ),
    TaskStatus.APPROVED: (
        TaskStatus.IN_PROGRESS,
        TaskStatus.ON_HOLD,
        TaskStatus.CANCELLED,
    ),
    TaskStatus.IN_PROGRESS: (
        TaskStatus.PENDING_REVIEW,
        TaskStatus.BLOCKED,
        TaskStatus.ON_HOLD,
        TaskStatus.CANCELLED,
    ),
    TaskStatus.PENDING_REVIEW: (
        TaskStatus.DONE,
        TaskStatus.IN_PROGRESS,
        TaskStatus.CANCELLED,
    ),
    TaskStatus.BLOCKED: (TaskStatus.IN_PROGRESS, TaskStatus.CANCELLED),
    TaskStatus.ON_HOLD: (TaskStatus.IN_PROGRESS, TaskStatus.CANCELLED),
    TaskStatus.DONE: (),
    TaskStatus.CANCELLED: (),
}


def initial_status(is_request: bool, requested: TaskStatus | None) -> TaskStatus:
    """Return the status a new task is persisted with.

    Assistance requests always enter the approval queue and ignore the
    caller's status. Normal tasks keep the caller's status and only default
    to AWAITING_APPROVAL when none was given.
    """
    if is_request:
        return TaskStatus.AWAITING_APPROVAL
    return requested or TaskStatus.AWAITING_APPROVAL


def next_statuses(current: TaskStatus) -> list[TaskStatus]:
    """Return statuses reachable from current in one step."""
    return list(VALID_STATUS_TRANSITIONS.get(current, ()))


def is_valid_transition(current: TaskStatus, target: TaskStatus) -> bool:
    """Return True if target is reachable from current in one step."""
    return target in VALID_STATUS_TRANSITIONS.get(current, ())


def validate_transition(current: TaskStatus, target: TaskStatus) -> None:
    """Raise StatusTransitionException unless current -> target is allowed.

    Re-setting the current status is accepted as a no-op.
    """
    if current == target:
        return
    if not is_valid_transition(current, target):
        raise StatusTransitionException(
            from_status=current.value,
            to_status=target.value,
            allowed=[s.value for s in next_statuses(current)],
        )
