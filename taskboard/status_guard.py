"""
Status transition guard: who may change a task, and what a change implies.

Both entry points mutate the task in memory only; the caller commits.
Whichever of `set_status` / `set_checklist` runs last decides the status.
"""
from typing import Iterable, List, Mapping, Optional

from taskboard.errors import AuthorizationError
from taskboard.logger import get_logger
from taskboard.models import Role, TaskStatus
from taskboard.progress import compute_progress

logger = get_logger(__name__)


def is_admin(user) -> bool:
    return getattr(user, "role", None) in (Role.ADMIN, Role.ADMIN.value)


def is_assignee(task, user) -> bool:
    return any(assignee.id == user.id for assignee in task.assigned_to or [])


def ensure_can_modify(task, requester) -> None:
    """Raise AuthorizationError unless requester is an admin or assigned to the task."""
    if is_admin(requester) or is_assignee(task, requester):
        return
    logger.warning(f"User {requester.id} denied update on task {task.id}")
    raise AuthorizationError("You are not authorized to update this task")


def normalize_checklist(items: Optional[Iterable[Mapping]]) -> List[dict]:
    """Copy checklist entries into plain {"text", "completed"} dicts."""
    return [
        {"text": str(item.get("text", "")), "completed": bool(item.get("completed", False))}
        for item in items or []
    ]


def apply_checklist(task, items: Optional[Iterable[Mapping]]) -> None:
    """Replace the checklist and re-derive progress and status from it."""
    checklist = normalize_checklist(items)
    progress, status = compute_progress(checklist)
    task.todo_checklist = checklist
    task.progress = progress
    task.status = status.value


def set_status(task, requester, new_status: TaskStatus) -> None:
    """
    Set the task status directly.

    Completing a task checks every checklist item and sets progress to 100.
    Moving away from completed leaves the checklist as it is.
    """
    ensure_can_modify(task, requester)
    new_status = TaskStatus(new_status)

    task.status = new_status.value
    if new_status is TaskStatus.COMPLETED:
        task.todo_checklist = [
            {**item, "completed": True} for item in normalize_checklist(task.todo_checklist)
        ]
        task.progress = 100

    logger.info(f"Task {task.id} status set to {new_status.value} by user {requester.id}")


def set_checklist(task, requester, new_checklist: Iterable[Mapping]) -> None:
    """Replace the checklist; progress and status are always recomputed."""
    ensure_can_modify(task, requester)
    apply_checklist(task, new_checklist)
    logger.info(
        f"Task {task.id} checklist updated by user {requester.id}: "
        f"progress={task.progress} status={task.status}"
    )
