from datetime import datetime, timezone
from typing import Dict, List, Optional

from pydantic import Field, field_validator

from taskboard.models import Priority, TaskStatus
from taskboard.schemas.base import CamelModel
from taskboard.schemas.user import UserBrief


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Offset-aware timestamps are shifted to UTC and stored naive."""
    if value is not None and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


class ChecklistItem(CamelModel):
    text: str
    completed: bool = False


class CreateTaskInput(CamelModel):
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    priority: Priority = Priority.MEDIUM
    due_date: Optional[datetime] = None
    assigned_to: List[int] = Field(default_factory=list)
    attachments: List[str] = Field(default_factory=list)
    todo_checklist: List[ChecklistItem] = Field(default_factory=list)

    @field_validator("due_date")
    @classmethod
    def due_date_as_utc(cls, value):
        return to_naive_utc(value)


class UpdateTaskInput(CamelModel):
    """Partial update; omitted fields keep their current value."""
    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = Field(default=None, min_length=1)
    priority: Optional[Priority] = None
    due_date: Optional[datetime] = None
    assigned_to: Optional[List[int]] = None
    attachments: Optional[List[str]] = None
    todo_checklist: Optional[List[ChecklistItem]] = None

    @field_validator("due_date")
    @classmethod
    def due_date_as_utc(cls, value):
        return to_naive_utc(value)


class SetStatusInput(CamelModel):
    status: TaskStatus


class SetChecklistInput(CamelModel):
    todo_checklist: List[ChecklistItem]


class TaskOut(CamelModel):
    id: int
    title: str
    description: str
    priority: str
    status: str
    progress: int
    due_date: Optional[datetime] = None
    assigned_to: List[UserBrief] = Field(default_factory=list)
    todo_checklist: List[Dict] = Field(default_factory=list)
    completed_todo_count: int = 0
    attachments: List[str] = Field(default_factory=list)
    created_by_id: int
    created_at: datetime
    updated_at: datetime


class TaskMessage(CamelModel):
    message: str
    task: TaskOut


class RecentTask(CamelModel):
    id: int
    title: str
    status: str
    priority: str
    created_at: datetime


class TaskListResponse(CamelModel):
    tasks: List[TaskOut]
    status_summary: Dict[str, int]


class DashboardResponse(CamelModel):
    success: bool = True
    message: str = "Dashboard data fetched successfully"
    statistics: Dict[str, int]
    charts: Dict[str, Dict[str, int]]
    recent_tasks: List[RecentTask]
