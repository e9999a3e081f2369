"""
Task endpoints: CRUD, status/checklist updates and dashboards.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from taskboard import repository
from taskboard.auth.oauth2 import get_current_user, require_admin
from taskboard.dashboard import build_dashboard, status_summary
from taskboard.db import get_db
from taskboard.logger import get_logger
from taskboard.models import Task, User, parse_status
from taskboard.schemas.task import (
    CreateTaskInput,
    DashboardResponse,
    RecentTask,
    SetChecklistInput,
    SetStatusInput,
    TaskListResponse,
    TaskMessage,
    TaskOut,
    UpdateTaskInput,
)
from taskboard.status_guard import (
    apply_checklist,
    ensure_can_modify,
    set_checklist,
    set_status,
)

logger = get_logger(__name__)

router = APIRouter(prefix="/api/tasks", tags=["Tasks"])


def _dashboard_response(tasks) -> DashboardResponse:
    data = build_dashboard(tasks)
    return DashboardResponse(
        statistics=data.statistics(),
        charts={
            "taskDistribution": data.distribution.to_dict(),
            "taskPriorityLevels": data.priority_levels.to_dict(),
        },
        recent_tasks=[RecentTask.model_validate(task) for task in data.recent],
    )


@router.get("/dashboard-data", response_model=DashboardResponse)
def admin_dashboard(
    user: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    """Dashboard over every task."""
    return _dashboard_response(repository.scoped_tasks(db, None))


@router.get("/user-dashboard-data", response_model=DashboardResponse)
def user_dashboard(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Dashboard over the tasks assigned to the requester, whatever their role."""
    return _dashboard_response(repository.scoped_tasks(db, user))


def _status_matches(stored: str, wanted: str) -> bool:
    """Compare through the label table; unrecognized labels must match exactly."""
    bucket = parse_status(wanted)
    if bucket is None:
        return stored == wanted
    return parse_status(stored) is bucket


@router.get("", response_model=TaskListResponse)
def list_tasks(
    status: Optional[str] = Query(None, description="Only return tasks with this status"),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Tasks in the requester's scope plus status counts for the whole scope."""
    scope = repository.visible_tasks(db, user)
    tasks = [task for task in scope if _status_matches(task.status, status)] if status else scope
    return TaskListResponse(
        tasks=[TaskOut.model_validate(task) for task in tasks],
        status_summary=status_summary(scope).to_dict(),
    )


@router.get("/{task_id}", response_model=TaskOut)
def get_task(
    task_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return repository.get_task(db, task_id)


@router.post("", response_model=TaskMessage, status_code=201)
def create_task(
    body: CreateTaskInput,
    user: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    task = Task(
        title=body.title,
        description=body.description,
        priority=body.priority.value,
        due_date=body.due_date,
        attachments=list(body.attachments),
        created_by_id=user.id,
    )
    task.assigned_to = repository.resolve_assignees(db, body.assigned_to)
    apply_checklist(task, [item.model_dump() for item in body.todo_checklist])

    repository.save(db, task, "create task")
    logger.info(f"Task {task.id} created by admin {user.id}")
    return TaskMessage(message="Task Created", task=TaskOut.model_validate(task))


@router.put("/{task_id}", response_model=TaskMessage)
def update_task(
    task_id: int,
    body: UpdateTaskInput,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    task = repository.get_task(db, task_id)
    ensure_can_modify(task, user)

    updates = body.model_dump(exclude_unset=True)
    for field in ("title", "description"):
        if updates.get(field) is not None:
            setattr(task, field, updates[field])
    if body.priority is not None:
        task.priority = body.priority.value
    if "due_date" in updates:
        task.due_date = body.due_date
    if body.attachments is not None:
        task.attachments = list(body.attachments)
    if body.assigned_to is not None:
        task.assigned_to = repository.resolve_assignees(db, body.assigned_to)
    if body.todo_checklist is not None:
        apply_checklist(task, [item.model_dump() for item in body.todo_checklist])

    repository.save(db, task, f"update task {task_id}")
    logger.info(f"Task {task_id} updated by user {user.id}")
    return TaskMessage(message="Task updated", task=TaskOut.model_validate(task))


@router.delete("/{task_id}")
def delete_task(
    task_id: int,
    user: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    task = repository.get_task(db, task_id)
    repository.delete(db, task, f"delete task {task_id}")
    logger.info(f"Task {task_id} deleted by admin {user.id}")
    return {"message": "Task deleted"}


@router.put("/{task_id}/status", response_model=TaskMessage)
def update_task_status(
    task_id: int,
    body: SetStatusInput,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    task = repository.get_task(db, task_id)
    set_status(task, user, body.status)
    repository.save(db, task, f"update status of task {task_id}")
    return TaskMessage(message="Status updated", task=TaskOut.model_validate(task))


@router.put("/{task_id}/todo", response_model=TaskMessage)
def update_task_checklist(
    task_id: int,
    body: SetChecklistInput,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    task = repository.get_task(db, task_id)
    set_checklist(task, user, [item.model_dump() for item in body.todo_checklist])
    repository.save(db, task, f"update checklist of task {task_id}")
    return TaskMessage(message="Checklist updated", task=TaskOut.model_validate(task))
